"""Google Calendar enrichment: events and free slots for a participant."""

from lunch_scheduler.gcal.client import MISSING_CREDENTIALS_MESSAGE, get_calendar_window
from lunch_scheduler.gcal.models import (
    CalendarEvent,
    CalendarLookupResult,
    CalendarWindow,
    FreeSlot,
)
from lunch_scheduler.gcal.slots import compute_free_slots

__all__ = [
    "CalendarEvent",
    "CalendarLookupResult",
    "CalendarWindow",
    "compute_free_slots",
    "FreeSlot",
    "get_calendar_window",
    "MISSING_CREDENTIALS_MESSAGE",
]
