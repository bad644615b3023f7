"""
FileBookingSource: the mock booking service.

Reads booking.json from disk after a simulated network delay.  Useful for
local development and demos; production would use HttpBookingSource.
"""

import asyncio
import json
import logging
from pathlib import Path

from src.domain.booking import BookingRecord
from src.domain.booking_source import BookingSource
from src.domain.errors import NetworkError, ParsingError

log = logging.getLogger(__name__)


class FileBookingSource(BookingSource):

    def __init__(self, path: str | Path = "data/booking.json", mock_delay: float = 1.0):
        self._path = Path(path)
        self._mock_delay = mock_delay

    async def fetch_booking_record(self) -> BookingRecord:
        if self._mock_delay > 0:
            await asyncio.sleep(self._mock_delay)

        if not self._path.is_file():
            raise NetworkError("Booking JSON file not found")

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise NetworkError(f"Failed to read {self._path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except ValueError as exc:
            log.error("Failed to parse booking data: %s", exc)
            raise ParsingError(str(exc)) from exc

        record = BookingRecord.from_dict(data)
        log.debug("Loaded booking %s from %s", record.ship_reference, self._path)
        return record
