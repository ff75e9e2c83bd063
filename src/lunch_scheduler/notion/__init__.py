"""Notion-backed persistence for booking records."""

from lunch_scheduler.notion.client import get_data_source_id, get_notion_client, reset_client
from lunch_scheduler.notion.properties import build_booking_properties
from lunch_scheduler.notion.service import create_booking_page

__all__ = [
    "build_booking_properties",
    "create_booking_page",
    "get_data_source_id",
    "get_notion_client",
    "reset_client",
]
