"""Pure function mapping a BookingRecord to Notion API page properties.

The LunchBookings database has one title column (Booking ID, the primary key)
and five rich_text columns. Every value is stored as a string.
"""

from lunch_scheduler.models.booking import BookingRecord


def _rich_text(text: str, limit: int = 2000) -> list[dict]:
    """Split text into rich_text objects under Notion's 2000-char limit."""
    if not text:
        return [{"type": "text", "text": {"content": ""}}]
    return [
        {"type": "text", "text": {"content": text[i : i + limit]}}
        for i in range(0, len(text), limit)
    ]


def build_booking_properties(record: BookingRecord) -> dict:
    """Return a properties dict suitable for pages.create(properties=...)."""
    return {
        "Booking ID": {"title": _rich_text(record.booking_id)},
        "User ID": {"rich_text": _rich_text(record.user_id)},
        "Lunch DateTime": {"rich_text": _rich_text(record.lunch_datetime)},
        "Participants": {"rich_text": _rich_text(record.participants)},
        "Channel": {"rich_text": _rich_text(record.channel)},
        "Created At": {"rich_text": _rich_text(record.created_at)},
    }
