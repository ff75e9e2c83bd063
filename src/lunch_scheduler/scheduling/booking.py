"""Booking record construction and the format-then-persist step."""

import uuid
from datetime import datetime, timezone, tzinfo

from pydantic import BaseModel

from lunch_scheduler.gcal.models import FreeSlot
from lunch_scheduler.models.booking import BookingRecord, ExtractionResult
from lunch_scheduler.scheduling.formatter import format_message
from lunch_scheduler.scheduling.intent import classify
from lunch_scheduler.storage import BookingStore

PERSISTENCE_ERROR_PREFIX = "データストアへの保存に失敗しました: "


class BookingOutcome(BaseModel):
    """Result of processing one lunch request.

    On success, message holds the text to post. On failure, error holds the
    store's detail and no message must be sent.
    """

    ok: bool
    message: str | None = None
    record: BookingRecord | None = None
    error: str | None = None


def build_booking_record(
    author_user_id: str,
    datetime_token: str | None,
    participants: list[str],
    channel_id: str = "",
) -> BookingRecord:
    """Assemble a new booking record with a fresh id and UTC creation time.

    participants is stored as a plain comma join ("U1,U2"), not mention syntax.
    """
    return BookingRecord(
        booking_id=str(uuid.uuid4()),
        user_id=author_user_id,
        lunch_datetime=datetime_token or "",
        participants=",".join(participants),
        channel=channel_id,
        created_at=datetime.now(timezone.utc).isoformat(),
    )


async def process_booking(
    store: BookingStore,
    author_user_id: str,
    extraction: ExtractionResult,
    free_slots: list[FreeSlot] | None = None,
    channel_id: str = "",
    tz: tzinfo | None = None,
) -> BookingOutcome:
    """Format the confirmation message and persist the booking.

    The record is written exactly once. A failed write aborts the request:
    the outcome carries the error and no message.
    """
    intent = classify(extraction.has_mentions, extraction.has_datetime)
    message = format_message(
        intent,
        author_user_id,
        extraction.datetime_token,
        extraction.mentioned_users,
        free_slots,
        tz=tz,
    )
    record = build_booking_record(
        author_user_id,
        extraction.datetime_token,
        extraction.mentioned_users,
        channel_id,
    )

    result = await store.put(record)
    if not result.ok:
        return BookingOutcome(
            ok=False,
            record=record,
            error=f"{PERSISTENCE_ERROR_PREFIX}{result.error}",
        )

    return BookingOutcome(ok=True, message=message, record=record)
