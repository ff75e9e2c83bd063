"""Tests for the Google Calendar lookup."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from lunch_scheduler.gcal.client import (
    API_ERROR_PREFIX,
    MISSING_CREDENTIALS_MESSAGE,
    MISSING_REFRESH_TOKEN_MESSAGE,
    get_calendar_window,
)

START = "2024-07-20T09:00:00+00:00"
END = "2024-07-20T15:00:00+00:00"

_EVENTS_BODY = {
    "items": [
        {
            "id": "ev1",
            "summary": "既存の会議",
            "status": "confirmed",
            "start": {"dateTime": "2024-07-20T10:00:00Z"},
            "end": {"dateTime": "2024-07-20T11:00:00Z"},
        },
        {
            "id": "ev2",
            "summary": "ランチミーティング",
            "status": "confirmed",
            "start": {"dateTime": "2024-07-20T12:00:00Z"},
            "end": {"dateTime": "2024-07-20T13:00:00Z"},
        },
    ]
}


def _mock_settings(**overrides) -> MagicMock:
    settings = MagicMock()
    settings.google_client_id = "client-id"
    settings.google_client_secret = "client-secret"
    settings.google_refresh_token = "refresh-token"
    settings.calendar_timeout = 5.0
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


def _mock_http_client(post_response: httpx.Response, get_response: httpx.Response) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.post = AsyncMock(return_value=post_response)
    mock_client.get = AsyncMock(return_value=get_response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@patch("lunch_scheduler.gcal.client.get_settings")
async def test_missing_credentials_short_circuits(mock_get_settings: MagicMock):
    """Without client id/secret: success=False, empty JSON arrays, literal message."""
    mock_get_settings.return_value = _mock_settings(google_client_id="", google_client_secret="")

    with patch("lunch_scheduler.gcal.client.httpx.AsyncClient") as mock_cls:
        result = await get_calendar_window("a@example.com", START, END)

    assert result.success is False
    assert result.events_json == "[]"
    assert result.free_time_slots_json == "[]"
    assert result.error_message == MISSING_CREDENTIALS_MESSAGE
    assert "GOOGLE_CLIENT_ID" in result.error_message
    assert "GOOGLE_CLIENT_SECRET" in result.error_message
    mock_cls.assert_not_called()


@patch("lunch_scheduler.gcal.client.get_settings")
async def test_missing_refresh_token_short_circuits(mock_get_settings: MagicMock):
    """Without a refresh token the lookup is skipped with its own message."""
    mock_get_settings.return_value = _mock_settings(google_refresh_token="")

    result = await get_calendar_window("a@example.com", START, END)

    assert result.success is False
    assert result.error_message == MISSING_REFRESH_TOKEN_MESSAGE


@patch("lunch_scheduler.gcal.client.get_settings")
async def test_successful_lookup(mock_get_settings: MagicMock):
    """Events are mapped and free slots derived from them."""
    mock_get_settings.return_value = _mock_settings()
    http = _mock_http_client(
        httpx.Response(200, json={"access_token": "ya29.token"}),
        httpx.Response(200, json=_EVENTS_BODY),
    )

    with patch("lunch_scheduler.gcal.client.httpx.AsyncClient", return_value=http):
        result = await get_calendar_window("a@example.com", START, END)

    assert result.success is True
    assert [e.id for e in result.window.events] == ["ev1", "ev2"]
    assert [(s.start, s.end) for s in result.window.free_slots] == [
        ("2024-07-20T09:00:00+00:00", "2024-07-20T10:00:00+00:00"),
        ("2024-07-20T11:00:00+00:00", "2024-07-20T12:00:00+00:00"),
        ("2024-07-20T13:00:00+00:00", "2024-07-20T15:00:00+00:00"),
    ]
    assert json.loads(result.events_json)[0]["summary"] == "既存の会議"

    get_kwargs = http.get.call_args.kwargs
    assert get_kwargs["headers"] == {"Authorization": "Bearer ya29.token"}
    assert get_kwargs["params"]["timeMin"] == START
    assert get_kwargs["params"]["singleEvents"] == "true"
    assert http.post.call_args.kwargs["data"]["grant_type"] == "refresh_token"


@patch("lunch_scheduler.gcal.client.get_settings")
async def test_transparent_event_leaves_time_free(mock_get_settings: MagicMock):
    """An event marked "free" in Google Calendar keeps its time available."""
    mock_get_settings.return_value = _mock_settings()
    body = {
        "items": [
            {
                "id": "ooo",
                "status": "confirmed",
                "transparency": "transparent",
                "start": {"dateTime": "2024-07-20T09:00:00Z"},
                "end": {"dateTime": "2024-07-20T15:00:00Z"},
            }
        ]
    }
    http = _mock_http_client(
        httpx.Response(200, json={"access_token": "ya29.token"}),
        httpx.Response(200, json=body),
    )

    with patch("lunch_scheduler.gcal.client.httpx.AsyncClient", return_value=http):
        result = await get_calendar_window("a@example.com", START, END)

    assert result.window.events[0].transparency == "transparent"
    assert [(s.start, s.end) for s in result.window.free_slots] == [(START, END)]


@patch("lunch_scheduler.gcal.client.get_settings")
async def test_token_refresh_failure(mock_get_settings: MagicMock):
    """A rejected refresh token returns success=False with the API error prefix."""
    mock_get_settings.return_value = _mock_settings()
    http = _mock_http_client(
        httpx.Response(400, json={"error": "invalid_grant"}),
        httpx.Response(200, json=_EVENTS_BODY),
    )

    with patch("lunch_scheduler.gcal.client.httpx.AsyncClient", return_value=http):
        result = await get_calendar_window("a@example.com", START, END)

    assert result.success is False
    assert result.error_message.startswith(API_ERROR_PREFIX)
    assert "invalid_grant" in result.error_message
    assert result.free_time_slots_json == "[]"
    http.get.assert_not_called()


@patch("lunch_scheduler.gcal.client.get_settings")
async def test_events_forbidden(mock_get_settings: MagicMock):
    """A 403 from events.list is a lookup failure, not an exception."""
    mock_get_settings.return_value = _mock_settings()
    http = _mock_http_client(
        httpx.Response(200, json={"access_token": "ya29.token"}),
        httpx.Response(403, json={"error": {"message": "Forbidden"}}),
    )

    with patch("lunch_scheduler.gcal.client.httpx.AsyncClient", return_value=http):
        result = await get_calendar_window("a@example.com", START, END)

    assert result.success is False
    assert "403" in result.error_message


@patch("lunch_scheduler.gcal.client.get_settings")
async def test_transport_error(mock_get_settings: MagicMock):
    """Network errors return success=False."""
    mock_get_settings.return_value = _mock_settings()
    http = _mock_http_client(httpx.Response(200), httpx.Response(200))
    http.post.side_effect = httpx.ConnectTimeout("timed out")

    with patch("lunch_scheduler.gcal.client.httpx.AsyncClient", return_value=http):
        result = await get_calendar_window("a@example.com", START, END)

    assert result.success is False
    assert "timed out" in result.error_message


@patch("lunch_scheduler.gcal.client.get_settings")
async def test_invalid_window_times(mock_get_settings: MagicMock):
    """Unparseable window bounds are reported, not raised."""
    mock_get_settings.return_value = _mock_settings()

    result = await get_calendar_window("a@example.com", "tomorrow", END)

    assert result.success is False
    assert result.error_message.startswith(API_ERROR_PREFIX)
