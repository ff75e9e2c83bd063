"""Lunch booking workflow: parse -> email lookup -> calendar lookup -> persist -> post.

Steps run strictly in sequence for one mention. Enrichment (emails, calendar)
is optional and never blocks a booking; a failed store write aborts the
request before anything is posted.
"""

import logging
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from pydantic import BaseModel

from lunch_scheduler.config import get_settings
from lunch_scheduler.gcal import FreeSlot, get_calendar_window
from lunch_scheduler.models.booking import ExtractionResult, Intent
from lunch_scheduler.models.slack import RawMessage, UserEmailInfo
from lunch_scheduler.scheduling import USAGE_MESSAGE, classify, parse_mention, process_booking
from lunch_scheduler.slack.directory import lookup_user_emails
from lunch_scheduler.slack.notifier import send_message
from lunch_scheduler.storage import get_booking_store

logger = logging.getLogger(__name__)


class WorkflowResult(BaseModel):
    """What happened to one mention."""

    status: str  # "sent", "invalid", or "error"
    intent: Intent
    booking_id: str | None = None
    message_sent: bool = False
    error: str | None = None


async def collect_free_slots(users: list[UserEmailInfo]) -> list[FreeSlot]:
    """Look up free slots on the first participant calendar with a known email.

    Returns [] when nobody has an email or the lookup fails.
    """
    email = next((u.email for u in users if u.email), None)
    if email is None:
        logger.info("No participant email available, skipping calendar lookup")
        return []

    settings = get_settings()
    start = datetime.now(timezone.utc).replace(microsecond=0)
    end = start + timedelta(hours=settings.calendar_window_hours)
    result = await get_calendar_window(email, start.isoformat(), end.isoformat())
    if not result.success:
        logger.warning("Calendar enrichment unavailable: %s", result.error_message)
        return []
    return result.window.free_slots


async def enrich(extraction: ExtractionResult, intent: Intent) -> list[FreeSlot]:
    """Run the optional email and calendar lookups for a request."""
    if not extraction.has_mentions:
        return []

    lookup = await lookup_user_emails(extraction.mentioned_users)
    if not lookup.success:
        logger.warning("Some participant lookups failed: %s", lookup.error_message)

    # Free slots are only shown when no date-time was given
    if intent != Intent.MENTIONS_ONLY:
        return []
    return await collect_free_slots(lookup.users)


async def run_lunch_workflow(message: RawMessage, bot_user_id: str | None = None) -> WorkflowResult:
    """Process one app mention end to end and post the confirmation.

    Args:
        message: The triggering mention.
        bot_user_id: This bot's own user id, excluded from participants.
    """
    settings = get_settings()

    extraction = parse_mention(message.text, bot_user_id)
    intent = classify(extraction.has_mentions, extraction.has_datetime)
    logger.info(
        "Parsed mention from %s in %s: intent=%s users=%d datetime=%s",
        message.author_user_id,
        message.channel_id,
        intent.value,
        len(extraction.mentioned_users),
        extraction.datetime_token,
    )

    if not extraction.should_start_workflow:
        sent = await send_message(message.channel_id, USAGE_MESSAGE)
        return WorkflowResult(status="invalid", intent=intent, message_sent=sent)

    free_slots = await enrich(extraction, intent)

    outcome = await process_booking(
        get_booking_store(),
        message.author_user_id,
        extraction,
        free_slots,
        tz=ZoneInfo(settings.timezone),
    )
    if not outcome.ok:
        logger.error("Booking not saved, no message posted: %s", outcome.error)
        return WorkflowResult(status="error", intent=intent, error=outcome.error)

    logger.info(
        "Booking %s saved with %d participant(s)",
        outcome.record.booking_id,
        len(outcome.record.participant_ids()),
    )

    sent = await send_message(message.channel_id, outcome.message)
    return WorkflowResult(
        status="sent",
        intent=intent,
        booking_id=outcome.record.booking_id,
        message_sent=sent,
    )
