"""User mention and date-time extraction for lunch requests.

Pure string processing: no Slack calls. The bot's own user id is passed in by
the caller instead of being looked up per message.
"""

import re

from lunch_scheduler.errors import InvalidInputError
from lunch_scheduler.models.booking import ExtractionResult

# Slack user mention: <@U012ABC>
MENTION_PATTERN = re.compile(r"<@(\w+)>")

# Slack app ids start with "A"; mentions of apps are never participants
APP_ID_PREFIX = "A"

# Tried in order, first match wins
DATETIME_PATTERNS = (
    re.compile(r"(\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2})"),  # 2024-07-20 12:30
    re.compile(r"(\d{1,2}/\d{1,2}\s+\d{2}:\d{2})"),  # 7/20 12:30
    re.compile(r"(\d{1,2}-\d{1,2}\s+\d{2}:\d{2})"),  # 7-20 12:30
)


def extract_users(text: str, self_user_id: str | None = None) -> list[str]:
    """Return mentioned user ids in message order, minus the bot and any app ids.

    Repeated mentions of the same user are kept.
    """
    return [
        user_id
        for user_id in MENTION_PATTERN.findall(text)
        if user_id != self_user_id and not user_id.startswith(APP_ID_PREFIX)
    ]


def extract_datetime(text: str) -> str | None:
    """Return the first date-time token found, verbatim, or None."""
    for pattern in DATETIME_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def parse_mention(text: str, self_user_id: str | None = None) -> ExtractionResult:
    """Extract participants and a date-time token from an app mention.

    Raises InvalidInputError if text is None or not a string.
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"message text must be a string, got {type(text).__name__}")

    users = extract_users(text, self_user_id) if "@" in text else []
    datetime_token = extract_datetime(text)

    has_mentions = "@" in text and len(users) > 0
    has_datetime = datetime_token is not None

    return ExtractionResult(
        mentioned_users=users,
        datetime_token=datetime_token,
        has_mentions=has_mentions,
        has_datetime=has_datetime,
        should_start_workflow=has_datetime or (has_mentions and len(users) > 0),
    )
