"""Slack event dispatch and app_mention filtering."""

import logging

from fastapi import BackgroundTasks
from fastapi.responses import JSONResponse

from lunch_scheduler.config import get_settings
from lunch_scheduler.models.slack import RawMessage
from lunch_scheduler.workflow import run_lunch_workflow

logger = logging.getLogger(__name__)


def handle_slack_event(payload: dict, background_tasks: BackgroundTasks) -> JSONResponse:
    """Dispatch a Slack event based on its type.

    - url_verification: return the challenge token
    - event_callback: process the contained event
    - anything else: acknowledge with 200
    """
    if payload.get("type") == "url_verification":
        return JSONResponse({"challenge": payload["challenge"]})

    if payload.get("type") == "event_callback":
        event = payload.get("event", {})
        handle_app_mention(event, background_tasks, bot_user_id=resolve_bot_user_id(payload))
        return JSONResponse({"ok": True})

    return JSONResponse({"ok": True})


def resolve_bot_user_id(payload: dict) -> str | None:
    """Return this bot's user id: the configured value, else the payload's authorization."""
    configured = get_settings().slack_bot_user_id
    if configured:
        return configured
    for authorization in payload.get("authorizations") or []:
        if authorization.get("is_bot") and authorization.get("user_id"):
            return authorization["user_id"]
    return None


def handle_app_mention(
    event: dict,
    background_tasks: BackgroundTasks,
    bot_user_id: str | None = None,
) -> None:
    """Filter an event and hand valid mentions to the booking workflow.

    Skipped: anything that is not app_mention, edits and other subtypes,
    messages from bots, and events missing text, channel, or user.
    """
    if event.get("type") != "app_mention":
        return

    if event.get("subtype") is not None:
        return

    if event.get("bot_id"):
        return

    text = event.get("text")
    channel_id = event.get("channel")
    user_id = event.get("user")
    if text is None or not channel_id or not user_id:
        logger.warning("Ignoring app_mention with missing fields: %s", sorted(event))
        return

    message = RawMessage(text=text, channel_id=channel_id, author_user_id=user_id)

    logger.info("Dispatching lunch request from %s in %s", user_id, channel_id)
    background_tasks.add_task(process_app_mention, message, bot_user_id)


async def process_app_mention(message: RawMessage, bot_user_id: str | None) -> None:
    """Run the workflow for one mention, logging any unexpected failure."""
    try:
        result = await run_lunch_workflow(message, bot_user_id)
    except Exception as exc:
        logger.error("Lunch workflow failed for %s: %s", message.channel_id, exc, exc_info=True)
        return

    logger.info(
        "Lunch workflow finished: status=%s booking=%s sent=%s",
        result.status,
        result.booking_id,
        result.message_sent,
    )
