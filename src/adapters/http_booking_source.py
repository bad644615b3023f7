"""
HttpBookingSource: fetch the booking from an HTTP endpoint.

requests is blocking, so each call runs in a worker thread and the event
loop stays free while the request is in flight.  Calls share one Session,
so they are serialized with a lock.
"""

import asyncio
import logging
import threading

import requests

from src.domain.booking import BookingRecord
from src.domain.booking_source import BookingSource
from src.domain.errors import NetworkError, ParsingError

log = logging.getLogger(__name__)


class HttpBookingSource(BookingSource):
    """Adapter: real HTTP client for the booking endpoint."""

    def __init__(self, url: str, timeout: float = 10.0, api_key: str | None = None):
        self._url = url
        self._timeout = timeout
        self._lock = threading.Lock()
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Cache-Control": "no-cache",
            }
        )
        if api_key:
            self.session.headers["Authorization"] = f"Bearer {api_key}"

    async def fetch_booking_record(self) -> BookingRecord:
        return await asyncio.to_thread(self._fetch)

    def _fetch(self) -> BookingRecord:
        try:
            with self._lock:
                resp = self.session.get(self._url, timeout=self._timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            log.warning("GET %s failed: %s", self._url, exc)
            raise NetworkError(str(exc)) from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise ParsingError(f"Response is not JSON: {exc}") from exc

        return BookingRecord.from_dict(data)
