"""Free-slot computation from a single calendar's busy events."""

from datetime import datetime, timedelta

from lunch_scheduler.gcal.models import CalendarEvent, FreeSlot

# Shortest gap worth offering for lunch
MIN_SLOT = timedelta(minutes=30)


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp, accepting a trailing "Z"."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def busy_intervals(events: list[CalendarEvent]) -> list[tuple[datetime, datetime]]:
    """Return sorted (start, end) pairs for events that block time.

    Only confirmed, opaque, timed events are busy. Tentative, cancelled,
    transparent and all-day (date-only start) events are skipped.
    """
    intervals = []
    for event in events:
        if event.status != "confirmed" or event.transparency == "transparent":
            continue
        if "T" not in event.start:
            continue
        intervals.append((parse_timestamp(event.start), parse_timestamp(event.end)))
    return sorted(intervals)


def compute_free_slots(
    events: list[CalendarEvent],
    window_start: datetime,
    window_end: datetime,
    min_slot: timedelta = MIN_SLOT,
) -> list[FreeSlot]:
    """Return the gaps of at least min_slot between busy events, in time order.

    Overlapping events are merged. Gaps are clipped to the window.
    """
    slots: list[FreeSlot] = []
    cursor = window_start
    for start, end in busy_intervals(events):
        if end <= cursor:
            continue
        gap_end = min(start, window_end)
        if gap_end - cursor >= min_slot:
            slots.append(FreeSlot(start=cursor.isoformat(), end=gap_end.isoformat()))
        cursor = max(cursor, end)
        if cursor >= window_end:
            return slots
    if window_end - cursor >= min_slot:
        slots.append(FreeSlot(start=cursor.isoformat(), end=window_end.isoformat()))
    return slots
