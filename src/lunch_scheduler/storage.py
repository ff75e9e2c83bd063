"""Booking record store: a put-by-key interface with Notion and in-memory backends.

The booking flow only ever writes. ``InMemoryBookingStore`` also supports
``get`` for local runs and tests.
"""

import logging
from typing import Protocol

from pydantic import BaseModel

from lunch_scheduler.config import get_settings
from lunch_scheduler.errors import PersistenceError
from lunch_scheduler.models.booking import BookingRecord
from lunch_scheduler.notion.service import create_booking_page

logger = logging.getLogger(__name__)


class StoreResult(BaseModel):
    """Outcome of a single put."""

    ok: bool
    error: str | None = None


class BookingStore(Protocol):
    async def put(self, record: BookingRecord) -> StoreResult: ...


class InMemoryBookingStore:
    """Dict-backed store keyed by booking_id."""

    def __init__(self) -> None:
        self._records: dict[str, BookingRecord] = {}

    async def put(self, record: BookingRecord) -> StoreResult:
        self._records[record.booking_id] = record
        return StoreResult(ok=True)

    async def get(self, booking_id: str) -> BookingRecord | None:
        return self._records.get(booking_id)

    def __len__(self) -> int:
        return len(self._records)


class NotionBookingStore:
    """Writes each booking as a page in the configured Notion database."""

    async def put(self, record: BookingRecord) -> StoreResult:
        try:
            await create_booking_page(record)
        except PersistenceError as exc:
            logger.error("Failed to persist booking %s: %s", record.booking_id, exc)
            return StoreResult(ok=False, error=str(exc))
        return StoreResult(ok=True)


_store: BookingStore | None = None


def get_booking_store() -> BookingStore:
    """Return the cached store selected by the booking_store setting.

    Raises ValueError for an unknown backend name.
    """
    global _store
    if _store is None:
        backend = get_settings().booking_store.lower()
        if backend == "notion":
            _store = NotionBookingStore()
        elif backend == "memory":
            _store = InMemoryBookingStore()
        else:
            raise ValueError(f"Unknown booking_store backend: {backend!r}")
    return _store


def reset_store() -> None:
    """Reset the cached store instance. Used for testing."""
    global _store
    _store = None
