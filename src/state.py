"""
Observable booking state: what the UI subscribes to.

Four fields, each published on its own when its value changes:

    record        BookingRecord | None
    is_loading    bool
    error         BookingError | None
    last_updated  datetime | None

Subscribers get callback(field, value) per field.  There is no atomic
multi-field update, so a subscriber that cares about several fields must
read them from the state rather than from the order of the callbacks.

Only the data manager writes to the state, and only from the event loop.
"""

import logging
from datetime import datetime
from typing import Any, Callable

from src.domain.booking import BookingRecord
from src.domain.errors import BookingError

log = logging.getLogger(__name__)

Subscriber = Callable[[str, Any], None]

FIELDS = ("record", "is_loading", "error", "last_updated")


class BookingState:

    def __init__(self):
        self._record: BookingRecord | None = None
        self._is_loading = False
        self._error: BookingError | None = None
        self._last_updated: datetime | None = None
        self._subscribers: list[Subscriber] = []

    # -- subscription --------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, field: str, value: Any) -> None:
        for callback in list(self._subscribers):
            try:
                callback(field, value)
            except Exception as exc:
                log.error("Subscriber %r failed on %s: %s", callback, field, exc)

    def _set(self, field: str, value: Any) -> None:
        attr = f"_{field}"
        if getattr(self, attr) == value:
            return
        setattr(self, attr, value)
        self._publish(field, value)

    # -- published fields ----------------------------------------------------

    @property
    def record(self) -> BookingRecord | None:
        return self._record

    @record.setter
    def record(self, value: BookingRecord | None) -> None:
        self._set("record", value)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @is_loading.setter
    def is_loading(self, value: bool) -> None:
        self._set("is_loading", value)

    @property
    def error(self) -> BookingError | None:
        return self._error

    @error.setter
    def error(self, value: BookingError | None) -> None:
        self._set("error", value)

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    @last_updated.setter
    def last_updated(self, value: datetime | None) -> None:
        self._set("last_updated", value)

    # -- derived, read-only --------------------------------------------------

    @property
    def status_description(self) -> str:
        if self._is_loading:
            return "Loading..."
        if self._error is not None:
            return f"Error: {self._error.description}"
        if self._last_updated is not None:
            return f"Last updated: {self._last_updated.astimezone():%Y-%m-%d %H:%M}"
        return "No data available"

    @property
    def has_valid_data(self) -> bool:
        return self._record is not None and self._error is None

    @property
    def segments_count(self) -> int:
        return len(self._record.segments) if self._record else 0

    @property
    def ship_reference(self) -> str:
        return self._record.ship_reference if self._record else "N/A"

    @property
    def duration_description(self) -> str:
        return self._record.duration_description if self._record else "N/A"
