"""
In-memory BookingSource for tests. No network, no mocking framework needed.

Test helpers:
    queue_record()    the next fetch returns this record
    queue_failure()   the next fetch raises this exception
    gate              when set to an asyncio.Event, fetches wait on it,
                      so a test can hold a fetch in flight
    calls             number of fetches started
"""

import asyncio

from src.domain.booking import BookingRecord
from src.domain.booking_source import BookingSource
from src.domain.errors import NoData


class SimulatorBookingSource(BookingSource):

    def __init__(self, record: BookingRecord | None = None):
        self._default = record
        self._queue: list[BookingRecord | BaseException] = []
        self.gate: asyncio.Event | None = None
        self.calls = 0

    def queue_record(self, record: BookingRecord) -> None:
        self._queue.append(record)

    def queue_failure(self, exc: BaseException) -> None:
        self._queue.append(exc)

    def set_default(self, record: BookingRecord | None) -> None:
        """Record returned once the queue is empty."""
        self._default = record

    async def fetch_booking_record(self) -> BookingRecord:
        self.calls += 1
        # Outcome is decided when the fetch starts, not when the gate opens
        outcome = self._queue.pop(0) if self._queue else self._default
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if outcome is None:
            raise NoData()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome
