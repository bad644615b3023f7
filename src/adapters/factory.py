import os

from src.domain.booking_cache import BookingCache
from src.domain.booking_source import BookingSource


def create_booking_source(kind: str | None = None) -> BookingSource:
    """
    Factory: create the right booking source based on config.

    The kind can be passed explicitly or read from the BOOKING_SOURCE
    env var. Defaults to "file".
    """
    kind = kind or os.environ.get("BOOKING_SOURCE", "file")

    if kind == "http":
        from .http_booking_source import HttpBookingSource

        return HttpBookingSource(
            url=os.environ["BOOKING_URL"],
            timeout=float(os.environ.get("BOOKING_HTTP_TIMEOUT", "10")),
            api_key=os.environ.get("BOOKING_API_KEY") or None,
        )

    if kind == "file":
        from .file_booking_source import FileBookingSource

        return FileBookingSource(
            path=os.environ.get("BOOKING_JSON_PATH", "data/booking.json"),
            mock_delay=float(os.environ.get("MOCK_DELAY", "1.0")),
        )

    raise ValueError(f"Unknown booking source: {kind!r}")


def create_booking_cache(db_path: str | None = None) -> BookingCache:
    """SQLite cache at db_path, or DB_PATH (default data/booking.db)."""
    from .sqlite_booking_cache import SqliteBookingCache

    db_path = db_path or os.environ.get("DB_PATH", "data/booking.db")
    if db_path != ":memory:" and os.path.dirname(db_path):
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
    return SqliteBookingCache(db_path=db_path)
