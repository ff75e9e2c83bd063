"""Booking models: parsed mention data, intent, and the persisted record."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Intent(str, Enum):
    """Shape of a lunch request, from which of participants/date-time were given."""

    INVALID = "invalid"
    DATETIME_ONLY = "datetime_only"
    MENTIONS_ONLY = "mentions_only"
    BOTH = "both"


class ExtractionResult(BaseModel):
    """Users and date-time token pulled out of a mention message."""

    model_config = ConfigDict(frozen=True)

    mentioned_users: list[str] = []  # Bot and app ids already removed
    datetime_token: str | None = None  # Verbatim, e.g. "2024-07-20 12:30" or "7/20 12:30"
    has_mentions: bool = False
    has_datetime: bool = False
    should_start_workflow: bool = False


class BookingRecord(BaseModel):
    """A write-once lunch booking row. Every column is a string."""

    model_config = ConfigDict(frozen=True)

    booking_id: str  # Primary key, UUID4
    user_id: str
    lunch_datetime: str
    participants: str  # Plain comma join: "U1,U2"
    channel: str = ""
    created_at: str  # UTC ISO-8601

    def participant_ids(self) -> list[str]:
        """Split the stored participants column back into user ids."""
        return self.participants.split(",") if self.participants else []
