"""Booking page creation in the Notion LunchBookings database."""

import logging

import httpx
from notion_client import errors as notion_errors

from lunch_scheduler.errors import ConfigurationError, PersistenceError
from lunch_scheduler.models.booking import BookingRecord
from lunch_scheduler.notion.client import get_data_source_id, get_notion_client
from lunch_scheduler.notion.properties import build_booking_properties

logger = logging.getLogger(__name__)


async def create_booking_page(record: BookingRecord) -> str:
    """Write one booking as a new Notion page and return the page id.

    Every failure (missing config, API rejection, timeout, transport error)
    is raised as PersistenceError carrying the underlying message.
    """
    try:
        client = await get_notion_client()
        ds_id = await get_data_source_id()
        page = await client.pages.create(
            parent={"type": "data_source_id", "data_source_id": ds_id},
            properties=build_booking_properties(record),
        )
    except ConfigurationError as exc:
        raise PersistenceError(str(exc)) from exc
    except (
        notion_errors.HTTPResponseError,
        notion_errors.RequestTimeoutError,
        httpx.HTTPError,
    ) as exc:
        raise PersistenceError(str(exc)) from exc

    logger.info("Created booking page %s for booking %s", page["id"], record.booking_id)
    return page["id"]
