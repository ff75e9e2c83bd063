"""Google Calendar lookup over the REST API with httpx.

Exchanges the configured refresh token for an access token, lists the
events on a participant's calendar for a time window, and derives free
slots from them. Never raises: every outcome is a CalendarLookupResult,
and a failed lookup means "no enrichment" to the caller.
"""

import logging
from urllib.parse import quote

import httpx

from lunch_scheduler.config import get_settings
from lunch_scheduler.errors import ConfigurationError, LookupFailure
from lunch_scheduler.gcal.models import CalendarEvent, CalendarLookupResult, CalendarWindow
from lunch_scheduler.gcal.slots import compute_free_slots, parse_timestamp

logger = logging.getLogger(__name__)

TOKEN_URL = "https://oauth2.googleapis.com/token"
EVENTS_URL = "https://www.googleapis.com/calendar/v3/calendars/{calendar_id}/events"

MISSING_CREDENTIALS_MESSAGE = (
    "Google OAuth認証情報が設定されていません。"
    "GOOGLE_CLIENT_IDとGOOGLE_CLIENT_SECRETを設定してください。"
)
MISSING_REFRESH_TOKEN_MESSAGE = (
    "Google OAuthリフレッシュトークンが設定されていません。"
    "GOOGLE_REFRESH_TOKENを設定してください。"
)
API_ERROR_PREFIX = "Google Calendar API呼び出しエラー: "


def _check_credentials() -> None:
    """Raise ConfigurationError unless the Google OAuth settings are present."""
    settings = get_settings()
    if not settings.google_client_id or not settings.google_client_secret:
        raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE)
    if not settings.google_refresh_token:
        raise ConfigurationError(MISSING_REFRESH_TOKEN_MESSAGE)


async def _fetch_access_token(client: httpx.AsyncClient) -> str:
    """Exchange the refresh token for a short-lived access token."""
    settings = get_settings()
    response = await client.post(
        TOKEN_URL,
        data={
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "refresh_token": settings.google_refresh_token,
            "grant_type": "refresh_token",
        },
    )
    if response.status_code != 200:
        raise LookupFailure(f"token refresh failed ({response.status_code}): {response.text}")
    token = response.json().get("access_token")
    if not token:
        raise LookupFailure("token response did not include an access_token")
    return token


def _event_time(value: dict) -> str:
    # Timed events carry dateTime, all-day events carry date
    return value.get("dateTime") or value.get("date") or ""


async def fetch_events(
    client: httpx.AsyncClient,
    access_token: str,
    email: str,
    start_time: str,
    end_time: str,
) -> list[CalendarEvent]:
    """List single (expanded) events on a calendar between start_time and end_time."""
    response = await client.get(
        EVENTS_URL.format(calendar_id=quote(email, safe="@")),
        headers={"Authorization": f"Bearer {access_token}"},
        params={
            "timeMin": start_time,
            "timeMax": end_time,
            "singleEvents": "true",
            "orderBy": "startTime",
            "maxResults": 250,
        },
    )
    if response.status_code != 200:
        raise LookupFailure(f"events.list failed ({response.status_code}): {response.text}")

    return [
        CalendarEvent(
            id=item.get("id", ""),
            summary=item.get("summary", ""),
            start=_event_time(item.get("start", {})),
            end=_event_time(item.get("end", {})),
            status=item.get("status", "confirmed"),
            transparency=item.get("transparency", "opaque"),
        )
        for item in response.json().get("items", [])
    ]


async def get_calendar_window(email: str, start_time: str, end_time: str) -> CalendarLookupResult:
    """Fetch events and free slots for email's calendar between two ISO-8601 times.

    Missing credentials short-circuit before any request with success=False
    and a message naming the required variables. API and transport errors
    also return success=False with empty data.
    """
    logger.info("Calendar lookup for %s (%s - %s)", email, start_time, end_time)

    try:
        _check_credentials()
    except ConfigurationError as exc:
        logger.error("Calendar lookup skipped: %s", exc)
        return CalendarLookupResult(success=False, error_message=str(exc))

    settings = get_settings()
    try:
        window_start = parse_timestamp(start_time)
        window_end = parse_timestamp(end_time)
        async with httpx.AsyncClient(timeout=httpx.Timeout(settings.calendar_timeout)) as client:
            access_token = await _fetch_access_token(client)
            events = await fetch_events(client, access_token, email, start_time, end_time)
        free_slots = compute_free_slots(events, window_start, window_end)
    except (LookupFailure, httpx.HTTPError, ValueError) as exc:
        logger.error("Calendar lookup failed for %s: %s", email, exc)
        return CalendarLookupResult(success=False, error_message=f"{API_ERROR_PREFIX}{exc}")

    logger.info("Calendar lookup for %s returned %d events, %d free slots",
                email, len(events), len(free_slots))
    return CalendarLookupResult(
        window=CalendarWindow(events=events, free_slots=free_slots),
        success=True,
    )
