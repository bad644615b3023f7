"""
BookingSource port: where fresh booking data comes from.
"""

from abc import ABC, abstractmethod

from src.domain.booking import BookingRecord


class BookingSource(ABC):
    """
    Port: fetch the current booking.

    The data manager depends ONLY on this interface.  It doesn't know or
    care whether the booking comes from a bundled JSON file, an HTTP API
    or an in-memory simulator.  Timeouts and retries are the adapter's
    business; the caller just awaits and handles the exception.
    """

    @abstractmethod
    async def fetch_booking_record(self) -> BookingRecord:
        """Return a fresh BookingRecord or raise."""
        ...
