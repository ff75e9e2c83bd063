"""Intent classification from extracted mention flags."""

from lunch_scheduler.models.booking import Intent


def classify(has_mentions: bool, has_datetime: bool) -> Intent:
    """Map the (mentions, date-time) flags onto one of the four intents."""
    if has_mentions and has_datetime:
        return Intent.BOTH
    if has_datetime:
        return Intent.DATETIME_ONLY
    if has_mentions:
        return Intent.MENTIONS_ONLY
    return Intent.INVALID
