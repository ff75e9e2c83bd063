"""Async Slack client singleton.

One AsyncWebClient per process, built from the bot token in settings. Used
for directory lookups (users.info) and for posting booking confirmations.
"""

from slack_sdk.web.async_client import AsyncWebClient

from lunch_scheduler.config import get_settings

_client: AsyncWebClient | None = None


async def get_slack_client() -> AsyncWebClient:
    """Return the cached Slack client, creating it from slack_bot_token on first call."""
    global _client
    if _client is None:
        _client = AsyncWebClient(token=get_settings().slack_bot_token)
    return _client


def reset_client() -> None:
    """Reset the cached client instance. Used for testing."""
    global _client
    _client = None
