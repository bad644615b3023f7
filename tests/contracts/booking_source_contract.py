"""
Adapter contract for BookingSource.

Any implementation must return a complete BookingRecord.
"""

from abc import ABC, abstractmethod

import pytest

from src.domain.booking import BookingRecord
from src.domain.booking_source import BookingSource


class BookingSourceContract(ABC):

    @abstractmethod
    def create_source(self) -> BookingSource:
        """Return a source that will succeed."""
        ...

    @pytest.mark.asyncio
    async def test_fetch_returns_record(self):
        record = await self.create_source().fetch_booking_record()
        assert isinstance(record, BookingRecord)
        assert record.ship_reference
        assert record.segments

    @pytest.mark.asyncio
    async def test_segments_keep_their_order(self):
        record = await self.create_source().fetch_booking_record()
        ids = [s.id for s in record.segments]
        assert ids == sorted(ids)

    @pytest.mark.asyncio
    async def test_repeated_fetches_succeed(self):
        source = self.create_source()
        first = await source.fetch_booking_record()
        second = await source.fetch_booking_record()
        assert first.ship_reference == second.ship_reference
