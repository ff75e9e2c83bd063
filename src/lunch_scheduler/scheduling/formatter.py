"""Confirmation message rendering for each lunch intent.

Templates are posted to Slack as-is; downstream consumers parse the bold
labels and bullet lines, so the literal text must stay stable.
"""

from datetime import datetime, tzinfo

from lunch_scheduler.gcal.models import FreeSlot
from lunch_scheduler.models.booking import Intent

USAGE_MESSAGE = "❌ 使用例: `/lunch @user1 @user2` または `/lunch 2024-07-20 12:30`"

_DATETIME_ONLY_TEMPLATE = """🍽️ **ランチ参加者募集**

👤 **投稿者**: <@{author}>
📅 **日時**: {datetime}
👥 **参加者**: 募集中

{datetime}にランチできる方はリアクションしてください！ 🎉"""

_MENTIONS_ONLY_TEMPLATE = """🍽️ **ランチ日程調整**

👤 **投稿者**: <@{author}>
👥 **参加者**: {participants}
📅 **日時**: 調整中{calendar_info}

みんなでランチしませんか？都合の良い日時を教えてください！ 🗓️"""

_BOTH_TEMPLATE = """🍽️ **ランチ参加確認**

👤 **投稿者**: <@{author}>
📅 **日時**: {datetime}
👥 **参加者**: {participants}

{datetime}のランチに参加できますか？
参加可能な方はリアクションしてください！ ✅"""


def format_participants(participants: list[str]) -> str:
    """Render user ids as Slack mentions: "<@U1>, <@U2>"."""
    return ", ".join(f"<@{p}>" for p in participants)


def format_local_time(value: str, tz: tzinfo | None = None) -> str:
    """Render an ISO-8601 timestamp as a local wall-clock time (HH:MM:SS).

    Naive timestamps are taken as already local. Raises ValueError or
    TypeError for anything that is not an ISO-8601 string.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz)
    return parsed.strftime("%H:%M:%S")


def format_free_slots(free_slots: list[FreeSlot], tz: tzinfo | None = None) -> str:
    """Build the free-slot section, or "" if no slot can be rendered.

    A slot with an unparseable start or end is dropped; the others still render.
    """
    lines: list[str] = []
    for slot in free_slots:
        try:
            lines.append(
                f"• {format_local_time(slot.start, tz)} - {format_local_time(slot.end, tz)}"
            )
        except (ValueError, TypeError, AttributeError):
            continue
    if not lines:
        return ""
    return "\n📅 **空き時間スロット**:\n" + "\n".join(lines)


def format_message(
    intent: Intent,
    author_user_id: str,
    datetime_token: str | None,
    participants: list[str],
    free_slots: list[FreeSlot] | None = None,
    tz: tzinfo | None = None,
) -> str:
    """Render the confirmation message for a classified lunch request.

    Pure function -- no I/O. free_slots only affects MENTIONS_ONLY messages.
    """
    if intent == Intent.DATETIME_ONLY:
        return _DATETIME_ONLY_TEMPLATE.format(
            author=author_user_id,
            datetime=datetime_token or "",
        )

    if intent == Intent.MENTIONS_ONLY:
        return _MENTIONS_ONLY_TEMPLATE.format(
            author=author_user_id,
            participants=format_participants(participants),
            calendar_info=format_free_slots(free_slots or [], tz),
        )

    if intent == Intent.BOTH:
        return _BOTH_TEMPLATE.format(
            author=author_user_id,
            datetime=datetime_token or "",
            participants=format_participants(participants),
        )

    return USAGE_MESSAGE
