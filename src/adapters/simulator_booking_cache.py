"""
In-memory BookingCache for testing, no database required.

The slot holds the serialized text, exactly like a durable store would,
so corrupt payloads can be injected and round trips go through JSON.
"""

import time
from typing import Callable

from src.domain.booking import BookingRecord
from src.domain.booking_cache import CACHE_KEY, BookingCache, CacheEntry


class InMemoryBookingCache(BookingCache):

    def __init__(self, clock: Callable[[], float] = time.time):
        self._slots: dict[str, str] = {}
        self._clock = clock

    def save(self, record: BookingRecord) -> None:
        self._slots[CACHE_KEY] = CacheEntry.create(record, self._clock()).to_json()

    def load(self) -> CacheEntry | None:
        raw = self._slots.get(CACHE_KEY)
        if raw is None:
            return None
        return CacheEntry.from_json(raw)

    def clear(self) -> None:
        self._slots.pop(CACHE_KEY, None)

    # -- test helpers --------------------------------------------------------

    def inject_entry(self, entry: CacheEntry) -> None:
        """Test helper: store an entry with arbitrary timestamps."""
        self._slots[CACHE_KEY] = entry.to_json()

    def inject_raw(self, text: str) -> None:
        """Test helper: store raw text, e.g. a corrupt payload."""
        self._slots[CACHE_KEY] = text
