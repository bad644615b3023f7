"""
BookingCache port: keeps the last fetched booking in a single durable slot.

A CacheEntry wraps the record with the time it was cached and the time it
expires.  Freshness is never stored: is_expired() and is_stale() are
recomputed from the wall clock on every call.
"""

import json
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.domain.booking import BookingRecord
from src.domain.errors import BookingError, CacheReadError, CacheWriteError

CACHE_KEY = "cached_booking_data"

# Entries older than this are still served, but trigger a background refresh.
STALE_THRESHOLD_SECONDS = 300


def compute_expires_at(record: BookingRecord, cached_at: float) -> float:
    """
    Hard expiry of an entry cached at `cached_at`.

    NOTE: record.duration is a number of minutes, but it is added here as
    seconds.  This matches the booking service's existing behaviour and is
    kept until product confirms the intended unit.  Keep every expiry
    computation going through this function.
    """
    return cached_at + float(record.duration)


def _epoch_seconds(payload: dict, key: str) -> float:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} is not a number")
    # NaN would make an entry neither expired nor stale, forever
    seconds = float(value)
    if not math.isfinite(seconds):
        raise ValueError(f"{key} is not finite")
    return seconds


@dataclass(frozen=True)
class CacheEntry:
    record: BookingRecord
    cached_at: float     # epoch seconds
    expires_at: float    # epoch seconds

    @classmethod
    def create(cls, record: BookingRecord, now: float) -> "CacheEntry":
        return cls(record=record, cached_at=now, expires_at=compute_expires_at(record, now))

    def is_expired(self, now: float | None = None) -> bool:
        now = time.time() if now is None else now
        return now > self.expires_at

    def is_stale(self, now: float | None = None) -> bool:
        now = time.time() if now is None else now
        return now - self.cached_at > STALE_THRESHOLD_SECONDS

    def is_fresh(self, now: float | None = None) -> bool:
        now = time.time() if now is None else now
        return not self.is_expired(now) and not self.is_stale(now)

    # -- serialization -------------------------------------------------------

    def to_json(self) -> str:
        try:
            return json.dumps({
                "data": self.record.to_dict(),
                "timestamp": self.cached_at,
                "expiryTime": self.expires_at,
            }, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise CacheWriteError(f"Failed to encode data: {exc}") from exc

    @classmethod
    def from_json(cls, text: str | bytes) -> "CacheEntry":
        """Decode a stored entry. Raises CacheReadError for anything unreadable."""
        try:
            payload = json.loads(text)
            if not isinstance(payload, dict):
                raise ValueError("entry is not an object")
            cached_at = _epoch_seconds(payload, "timestamp")
            expires_at = _epoch_seconds(payload, "expiryTime")
            record = BookingRecord.from_dict(payload["data"])
        except (ValueError, KeyError, TypeError, OverflowError, RecursionError, BookingError) as exc:
            raise CacheReadError(f"Failed to decode data: {exc}") from exc
        return cls(record=record, cached_at=cached_at, expires_at=expires_at)


class BookingCache(ABC):
    """
    Port: persist one cached booking under a fixed key.

    save() overwrites whatever was there.  load() returns None only when
    nothing is stored; a stored entry that cannot be decoded raises
    CacheReadError instead of pretending the slot is empty.
    """

    @abstractmethod
    def save(self, record: BookingRecord) -> None:
        """Wrap the record in a CacheEntry stamped now and persist it. Raises CacheWriteError."""
        ...

    @abstractmethod
    def load(self) -> CacheEntry | None:
        """Return the stored entry, None if there is none. Raises CacheReadError."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored entry. Calling it on an empty cache is not an error."""
        ...

    def is_valid(self) -> bool:
        """True when an entry is stored and is neither expired nor stale."""
        try:
            entry = self.load()
        except BookingError:
            return False
        return entry is not None and entry.is_fresh()
