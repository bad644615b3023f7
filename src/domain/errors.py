"""
Error kinds raised by the booking adapters and published by the data manager.

Every error the UI can see is a BookingError.  Anything else raised by a
fetch source is wrapped in a NetworkError before it is published.
"""


class BookingError(Exception):
    """Base class. Two errors are equal when they have the same kind and message."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    @property
    def description(self) -> str:
        return self.message

    def __str__(self) -> str:
        return self.description

    def __eq__(self, other):
        if not isinstance(other, BookingError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self):
        return hash((type(self), self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class NetworkError(BookingError):

    @property
    def description(self) -> str:
        return f"Network Error: {self.message}"


class ParsingError(BookingError):

    @property
    def description(self) -> str:
        return f"Parsing Error: {self.message}"


class CacheError(BookingError):

    @property
    def description(self) -> str:
        return f"Cache Error: {self.message}"


class CacheReadError(CacheError):
    """A stored entry exists but cannot be decoded."""


class CacheWriteError(CacheError):
    """The entry could not be encoded or written."""


class ExpiredData(BookingError):

    @property
    def description(self) -> str:
        return "Data has expired"


class NoData(BookingError):

    @property
    def description(self) -> str:
        return "No data available"


def classify(exc: BaseException) -> BookingError:
    """Pass BookingErrors through unchanged; anything else becomes a NetworkError."""
    if isinstance(exc, BookingError):
        return exc
    return NetworkError(str(exc) or type(exc).__name__)
