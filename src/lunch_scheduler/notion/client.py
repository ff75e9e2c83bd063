"""Async Notion client for the LunchBookings database.

The client and the database's data_source_id are created lazily and cached
for the life of the process. Pages are parented on the data source, which
Notion API 2025-09-03 requires.
"""

from notion_client import AsyncClient

from lunch_scheduler.config import get_settings
from lunch_scheduler.errors import ConfigurationError

_client: AsyncClient | None = None
_data_source_id: str | None = None


async def get_notion_client() -> AsyncClient:
    """Return the cached Notion client, creating it from settings on first use.

    Raises ConfigurationError if NOTION_API_KEY is not set.
    """
    global _client
    if _client is None:
        settings = get_settings()
        if not settings.notion_api_key:
            raise ConfigurationError("NOTION_API_KEY is not set; cannot write bookings to Notion.")
        _client = AsyncClient(auth=settings.notion_api_key)
    return _client


async def get_data_source_id() -> str:
    """Return the data_source_id of the bookings database, cached after first lookup.

    Raises ConfigurationError if NOTION_DATABASE_ID is unset or the database
    exposes no data source.
    """
    global _data_source_id
    if _data_source_id is None:
        settings = get_settings()
        if not settings.notion_database_id:
            raise ConfigurationError("NOTION_DATABASE_ID is not set; cannot write bookings to Notion.")
        client = await get_notion_client()
        db = await client.databases.retrieve(database_id=settings.notion_database_id)
        data_sources = db.get("data_sources", [])
        if not data_sources:
            raise ConfigurationError(
                f"Bookings database {settings.notion_database_id} has no data sources."
            )
        _data_source_id = data_sources[0]["id"]
    return _data_source_id


def reset_client() -> None:
    """Reset cached client and data_source_id. Used for testing."""
    global _client, _data_source_id
    _client = None
    _data_source_id = None
