"""Posting booking confirmations to Slack.

Fire-and-forget: Slack errors are logged and never raised, so a failed post
cannot undo a booking that has already been persisted.
"""

import logging

from slack_sdk.errors import SlackApiError

from lunch_scheduler.slack.client import get_slack_client

logger = logging.getLogger(__name__)


async def send_message(channel_id: str, text: str) -> bool:
    """Post text to a channel. Returns True if Slack accepted the message.

    Args:
        channel_id: Slack channel ID the mention came from.
        text: Fully formatted confirmation message.
    """
    try:
        client = await get_slack_client()
        await client.chat_postMessage(channel=channel_id, text=text)
    except SlackApiError as exc:
        error_code = exc.response.get("error", "") if exc.response else ""
        logger.warning(
            "Failed to post message to %s (%s)", channel_id, error_code, exc_info=True
        )
        return False
    return True
