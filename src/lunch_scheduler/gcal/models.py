"""Calendar models and the lookup result returned to the orchestrator.

Start/end values are kept as the ISO-8601 strings the Calendar API returns;
the formatter parses them at render time.
"""

import json

from pydantic import BaseModel, Field


class CalendarEvent(BaseModel):
    """One event from a participant's calendar."""

    id: str
    summary: str = ""
    start: str
    end: str
    status: str = "confirmed"  # confirmed, tentative or cancelled
    transparency: str = "opaque"  # "transparent" events do not block time


class FreeSlot(BaseModel):
    """A gap between busy events inside the lookup window."""

    start: str
    end: str


class CalendarWindow(BaseModel):
    """Events and free slots for one calendar over one time window."""

    events: list[CalendarEvent] = []
    free_slots: list[FreeSlot] = []


class CalendarLookupResult(BaseModel):
    """Outcome of a calendar lookup. success=False always carries empty data."""

    window: CalendarWindow = Field(default_factory=CalendarWindow)
    success: bool
    error_message: str | None = None

    @property
    def events_json(self) -> str:
        return json.dumps([e.model_dump() for e in self.window.events], ensure_ascii=False)

    @property
    def free_time_slots_json(self) -> str:
        return json.dumps([s.model_dump() for s in self.window.free_slots], ensure_ascii=False)
