from src.domain.booking import BookingRecord
from src.state import BookingState


class ConsoleBookingRenderer:
    """Adapter: print the booking to the console whenever the state changes. For dev/testing."""

    def __init__(self, state: BookingState, out=None):
        self._state = state
        self._out = out
        self._unsubscribe = state.subscribe(self._on_change)
        # Fields published before we attached are not replayed
        if state.record is not None:
            self.render(state.record)

    def close(self) -> None:
        self._unsubscribe()

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def _on_change(self, field: str, value) -> None:
        if field == "record" and value is not None:
            self.render(value)
        elif field == "error" and value is not None:
            self._print(f"!! {value.description} (retry with a refresh)")
        elif field == "is_loading":
            self._print("Loading..." if value else self._state.status_description)

    def render(self, record: BookingRecord) -> None:
        self._print(f"\n{'=' * 60}")
        self._print(f"  SHIP: {record.ship_reference}   TOKEN: {record.ship_token}")
        self._print(
            f"  DURATION: {record.duration_description}   "
            f"TICKET CHECKING: {'yes' if record.can_issue_ticket_checking else 'no'}"
        )
        self._print(f"{'=' * 60}")
        for segment in record.segments:
            pair = segment.origin_and_destination_pair
            self._print(
                f"  #{segment.id}  {pair.origin.code} {pair.origin_city}"
                f"  ->  {pair.destination.code} {pair.destination_city}"
            )
        self._print(f"{'=' * 60}")
        self._print(f"  {self._state.status_description}\n")
