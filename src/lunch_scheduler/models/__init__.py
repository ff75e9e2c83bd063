"""Data models and enums for the lunch scheduler."""

from lunch_scheduler.models.booking import BookingRecord, ExtractionResult, Intent
from lunch_scheduler.models.slack import RawMessage, UserEmailInfo, UserEmailLookupResult

__all__ = [
    "BookingRecord",
    "ExtractionResult",
    "Intent",
    "RawMessage",
    "UserEmailInfo",
    "UserEmailLookupResult",
]
