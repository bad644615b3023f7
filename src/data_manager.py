"""
BookingDataManager: decides, on every request, where booking data comes from.

Flow of request_data(force_refresh):
  1. Not forced and the cache holds an entry that has not expired:
     publish it and return.  If the entry is stale, a background refresh
     is started and left to run on its own.
  2. Otherwise: is_loading on, fetch from the source.
       success  → save to the cache, publish record + last_updated
       failure  → publish the error, fall back to whatever the cache holds
  3. is_loading off, whatever happened.

A background refresh saves and publishes on success and only logs on
failure.  It never touches is_loading or error.  Background and
foreground refreshes may race; the last one to publish wins.
"""

import asyncio
import logging
from datetime import datetime, timezone

from src.domain.booking import BookingRecord
from src.domain.booking_cache import BookingCache, CacheEntry
from src.domain.booking_source import BookingSource
from src.domain.errors import BookingError, CacheError, classify
from src.state import BookingState

log = logging.getLogger(__name__)


def _as_datetime(epoch_seconds: float) -> datetime:
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)


class BookingDataManager:
    """
    Orchestrates cache, source and published state.

    Call request_data() when the UI needs the booking, refresh() on a
    pull-to-refresh, clear_cache() to forget everything.
    """

    def __init__(
        self,
        source: BookingSource,
        cache: BookingCache,
        state: BookingState | None = None,
    ):
        self._source = source
        self._cache = cache
        self.state = state if state is not None else BookingState()
        self._background: set[asyncio.Task] = set()
        self._load_cached_on_start()

    # -- public API ----------------------------------------------------------

    async def request_data(self, force_refresh: bool = False) -> BookingRecord | None:
        """Serve the booking from cache or source. Returns the published record."""
        log.debug("request_data force_refresh=%s", force_refresh)

        if not force_refresh:
            entry = self._load_quietly()
            if entry is not None and not entry.is_expired():
                log.debug("Using cached booking %s", entry.record.ship_reference)
                self.state.error = None
                self._publish_entry(entry)
                if entry.is_stale():
                    log.info("Cached booking is stale, refreshing in background")
                    self._start_background_refresh()
                return entry.record

        self.state.is_loading = True
        self.state.error = None
        try:
            await self._fetch_and_store()
        except Exception as exc:
            error = classify(exc)
            log.warning("Failed to fetch booking data: %s", error)
            self.state.error = error
            fallback = self._load_quietly()
            if fallback is not None:
                log.info("Falling back to cached booking %s", fallback.record.ship_reference)
                self._publish_entry(fallback)
        finally:
            self.state.is_loading = False

        return self.state.record

    async def refresh(self) -> BookingRecord | None:
        return await self.request_data(force_refresh=True)

    def clear_cache(self) -> None:
        try:
            self._cache.clear()
        except CacheError as exc:
            log.error("Failed to clear cache: %s", exc)
            return
        self.state.record = None
        self.state.last_updated = None
        log.info("Cache cleared")

    def is_data_valid(self) -> bool:
        return self._cache.is_valid()

    async def wait_for_background_refreshes(self) -> None:
        """Wait until every background refresh started so far has finished."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    # -- internals -----------------------------------------------------------

    async def _fetch_and_store(self) -> BookingRecord:
        record = await self._source.fetch_booking_record()
        self._cache.save(record)
        self.state.record = record
        self.state.last_updated = datetime.now(timezone.utc)
        log.info("Fetched booking %s", record.ship_reference)
        return record

    def _start_background_refresh(self) -> None:
        task = asyncio.get_running_loop().create_task(self._refresh_in_background())
        # The loop only keeps weak references to tasks
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _refresh_in_background(self) -> None:
        try:
            await self._fetch_and_store()
        except Exception as exc:
            log.warning("Background refresh failed: %s", classify(exc))
            return
        log.info("Background refresh completed")

    def _publish_entry(self, entry: CacheEntry) -> None:
        self.state.record = entry.record
        self.state.last_updated = _as_datetime(entry.cached_at)

    def _load_quietly(self) -> CacheEntry | None:
        try:
            return self._cache.load()
        except BookingError as exc:
            log.warning("Failed to load cached booking: %s", exc)
            return None

    def _load_cached_on_start(self) -> None:
        entry = self._load_quietly()
        if entry is not None and not entry.is_expired():
            log.info("Loaded cached booking %s on start", entry.record.ship_reference)
            self._publish_entry(entry)
