"""Mention parsing, intent classification, message formatting, and booking records."""

from lunch_scheduler.scheduling.booking import (
    BookingOutcome,
    build_booking_record,
    process_booking,
)
from lunch_scheduler.scheduling.formatter import USAGE_MESSAGE, format_message
from lunch_scheduler.scheduling.intent import classify
from lunch_scheduler.scheduling.mentions import parse_mention

__all__ = [
    "BookingOutcome",
    "build_booking_record",
    "classify",
    "format_message",
    "parse_mention",
    "process_booking",
    "USAGE_MESSAGE",
]
