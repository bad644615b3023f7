"""
SQLite adapter for BookingCache.

A single key-value table; the booking lives under one fixed key and every
save replaces it.  Use ":memory:" for tests, a file path for production.
"""

import logging
import sqlite3
import time
from datetime import datetime, timezone
from typing import Callable

from src.domain.booking import BookingRecord
from src.domain.booking_cache import CACHE_KEY, BookingCache, CacheEntry
from src.domain.errors import CacheError, CacheReadError, CacheWriteError

log = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS booking_cache (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteBookingCache(BookingCache):

    def __init__(self, db_path: str = "booking.db", clock: Callable[[], float] = time.time):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._clock = clock

    def save(self, record: BookingRecord) -> None:
        value = CacheEntry.create(record, self._clock()).to_json()
        try:
            self._conn.execute(
                "INSERT OR REPLACE INTO booking_cache (key, value, updated_at) VALUES (?, ?, ?)",
                (CACHE_KEY, value, _now()),
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            log.error("Failed to save booking data: %s", exc)
            raise CacheWriteError(f"Failed to write data: {exc}") from exc
        log.info("Saved booking %s to cache", record.ship_reference)

    def load(self) -> CacheEntry | None:
        try:
            row = self._conn.execute(
                "SELECT value FROM booking_cache WHERE key = ?", (CACHE_KEY,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise CacheReadError(f"Failed to read data: {exc}") from exc
        if not row:
            log.debug("No cached booking data found")
            return None
        return CacheEntry.from_json(row["value"])

    def clear(self) -> None:
        try:
            self._conn.execute("DELETE FROM booking_cache WHERE key = ?", (CACHE_KEY,))
            self._conn.commit()
        except sqlite3.Error as exc:
            raise CacheError(f"Failed to clear data: {exc}") from exc
        log.info("Cleared cached booking data")

    def close(self) -> None:
        self._conn.close()

    # -- test helpers --------------------------------------------------------

    def inject_raw(self, text: str) -> None:
        """Test helper: store raw text under the booking key, e.g. a corrupt payload."""
        self._conn.execute(
            "INSERT OR REPLACE INTO booking_cache (key, value, updated_at) VALUES (?, ?, ?)",
            (CACHE_KEY, text, _now()),
        )
        self._conn.commit()
