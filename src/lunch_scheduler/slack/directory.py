"""Participant email lookup through the Slack users.info API.

Lookups run one id at a time, in input order. A failed lookup never drops the
user or aborts the batch: the user is recorded with an empty email and the
failure is appended to the result's error_message.
"""

import asyncio
import logging

import aiohttp
from slack_sdk.errors import SlackApiError

from lunch_scheduler.config import get_settings
from lunch_scheduler.errors import LookupFailure
from lunch_scheduler.models.slack import UserEmailInfo, UserEmailLookupResult
from lunch_scheduler.slack.client import get_slack_client

logger = logging.getLogger(__name__)


def _display_name(user: dict) -> str:
    profile = user.get("profile") or {}
    return (
        profile.get("display_name")
        or profile.get("real_name")
        or user.get("name")
        or "Unknown"
    )


async def fetch_user(user_id: str, timeout: float) -> UserEmailInfo:
    """Look up one user's email and display name.

    Raises LookupFailure if Slack reports an error, the connection fails,
    or the call times out.
    A user without a visible email is not a failure (email="").
    """
    client = await get_slack_client()
    try:
        async with asyncio.timeout(timeout):
            response = await client.users_info(user=user_id, include_locale=True)
    except TimeoutError as exc:
        raise LookupFailure(f"users.info timed out after {timeout:.1f}s") from exc
    except SlackApiError as exc:
        error_code = exc.response.get("error", "") if exc.response else ""
        raise LookupFailure(error_code or str(exc)) from exc
    except aiohttp.ClientError as exc:
        raise LookupFailure(f"users.info request failed: {exc}") from exc

    user = response.get("user") if response.get("ok") else None
    if not user:
        raise LookupFailure(response.get("error") or "user not found")

    profile = user.get("profile") or {}
    return UserEmailInfo(
        user_id=user_id,
        email=profile.get("email") or "",
        name=_display_name(user),
    )


async def lookup_user_emails(user_ids: list[str]) -> UserEmailLookupResult:
    """Resolve every user id to a UserEmailInfo, in the order given.

    success is False if any single lookup failed; those users still appear
    in the result with email="".
    """
    timeout = get_settings().slack_lookup_timeout
    users: list[UserEmailInfo] = []
    errors: list[str] = []

    logger.info("Looking up emails for %d user(s)", len(user_ids))

    for user_id in user_ids:
        try:
            info = await fetch_user(user_id, timeout)
        except LookupFailure as exc:
            logger.warning("User lookup failed for %s: %s", user_id, exc)
            errors.append(f"ユーザー{user_id}の情報取得に失敗: {exc}。")
            users.append(UserEmailInfo(user_id=user_id))
            continue

        if not info.email:
            logger.info("No email visible for %s", user_id)
        users.append(info)

    found = sum(1 for u in users if u.email)
    logger.info("Email lookup complete: %d/%d with email", found, len(user_ids))

    return UserEmailLookupResult(
        users=users,
        success=not errors,
        error_message="".join(errors) or None,
    )
