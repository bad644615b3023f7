"""
Booking record: the payload served by the fetch sources and kept in the cache.

The wire format is the camelCase JSON produced by the booking service:

    {
      "shipReference": "ABCDEF",
      "shipToken": "AAAABBBCCCCDDD",
      "canIssueTicketChecking": false,
      "expiryTime": "1722409261",
      "duration": 2430,
      "segments": [
        {"id": 1, "originAndDestinationPair": {
            "origin": {"code": "AAA", "displayName": "AAA DisplayName", "url": "www.ship.com"},
            "originCity": "AAA",
            "destination": {...}, "destinationCity": "BBB"}}
      ]
    }
"""

from dataclasses import dataclass
from typing import Any

from src.domain.errors import ParsingError


def _require(data: Any, key: str, kind: type, where: str):
    if not isinstance(data, dict):
        raise ParsingError(f"{where}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise ParsingError(f"{where}: missing key {key!r}")
    value = data[key]
    # bool is a subclass of int; a flag is never a valid count
    if kind is int and isinstance(value, bool):
        raise ParsingError(f"{where}.{key}: expected int, got bool")
    if not isinstance(value, kind):
        raise ParsingError(
            f"{where}.{key}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class Location:
    code: str
    display_name: str
    url: str

    @classmethod
    def from_dict(cls, data: Any, where: str = "location") -> "Location":
        return cls(
            code=_require(data, "code", str, where),
            display_name=_require(data, "displayName", str, where),
            url=_require(data, "url", str, where),
        )

    def to_dict(self) -> dict:
        return {"code": self.code, "displayName": self.display_name, "url": self.url}


@dataclass(frozen=True)
class OriginAndDestinationPair:
    origin: Location
    origin_city: str
    destination: Location
    destination_city: str

    @classmethod
    def from_dict(cls, data: Any, where: str = "originAndDestinationPair") -> "OriginAndDestinationPair":
        return cls(
            origin=Location.from_dict(_require(data, "origin", dict, where), f"{where}.origin"),
            origin_city=_require(data, "originCity", str, where),
            destination=Location.from_dict(
                _require(data, "destination", dict, where), f"{where}.destination"
            ),
            destination_city=_require(data, "destinationCity", str, where),
        )

    def to_dict(self) -> dict:
        return {
            "origin": self.origin.to_dict(),
            "originCity": self.origin_city,
            "destination": self.destination.to_dict(),
            "destinationCity": self.destination_city,
        }


@dataclass(frozen=True)
class Segment:
    id: int
    origin_and_destination_pair: OriginAndDestinationPair

    @classmethod
    def from_dict(cls, data: Any, where: str = "segment") -> "Segment":
        return cls(
            id=_require(data, "id", int, where),
            origin_and_destination_pair=OriginAndDestinationPair.from_dict(
                _require(data, "originAndDestinationPair", dict, where),
                f"{where}.originAndDestinationPair",
            ),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "originAndDestinationPair": self.origin_and_destination_pair.to_dict(),
        }


@dataclass(frozen=True)
class BookingRecord:
    """One booking. Immutable: a refresh replaces the whole record."""
    ship_reference: str
    ship_token: str
    can_issue_ticket_checking: bool
    expiry_time: str          # epoch seconds as a numeric string, e.g. "1722409261"
    duration: int             # minutes
    segments: tuple[Segment, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "BookingRecord":
        """Build a record from its wire dict. Raises ParsingError on a bad shape."""
        where = "booking"
        raw_segments = _require(data, "segments", list, where)
        return cls(
            ship_reference=_require(data, "shipReference", str, where),
            ship_token=_require(data, "shipToken", str, where),
            can_issue_ticket_checking=_require(data, "canIssueTicketChecking", bool, where),
            expiry_time=_require(data, "expiryTime", str, where),
            duration=_require(data, "duration", int, where),
            segments=tuple(
                Segment.from_dict(s, f"segments[{i}]") for i, s in enumerate(raw_segments)
            ),
        )

    def to_dict(self) -> dict:
        return {
            "shipReference": self.ship_reference,
            "shipToken": self.ship_token,
            "canIssueTicketChecking": self.can_issue_ticket_checking,
            "expiryTime": self.expiry_time,
            "duration": self.duration,
            "segments": [s.to_dict() for s in self.segments],
        }

    @property
    def duration_description(self) -> str:
        hours, minutes = divmod(self.duration, 60)
        return f"{hours}h {minutes}m"
