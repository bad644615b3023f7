"""
Console renderer tests: the renderer only reacts to published state.
"""

import io

from src.adapters.console_renderer import ConsoleBookingRenderer
from src.domain.errors import NetworkError
from src.state import BookingState
from tests.contracts.sample_booking import sample_record


def test_renders_record_with_segments():
    state = BookingState()
    out = io.StringIO()
    ConsoleBookingRenderer(state, out=out)

    state.record = sample_record()

    text = out.getvalue()
    assert "SHIP: ABCDEF" in text
    assert "DURATION: 40h 30m" in text
    assert "#1  AAA AAA  ->  BBB BBB" in text
    assert "#2  BBB BBB  ->  CCC CCC" in text


def test_renders_error_with_retry_hint():
    state = BookingState()
    out = io.StringIO()
    ConsoleBookingRenderer(state, out=out)

    state.error = NetworkError("offline")

    assert "Network Error: offline" in out.getvalue()
    assert "retry" in out.getvalue()


def test_close_stops_rendering():
    state = BookingState()
    out = io.StringIO()
    renderer = ConsoleBookingRenderer(state, out=out)
    renderer.close()

    state.record = sample_record()

    assert out.getvalue() == ""


def test_record_published_before_attaching_is_rendered():
    """The runner attaches after the manager has loaded the cache on start."""
    from src.adapters.simulator_booking_cache import InMemoryBookingCache
    from src.adapters.simulator_booking_source import SimulatorBookingSource
    from src.data_manager import BookingDataManager

    cache = InMemoryBookingCache()
    cache.save(sample_record(duration=10_000))
    manager = BookingDataManager(SimulatorBookingSource(), cache)

    out = io.StringIO()
    ConsoleBookingRenderer(manager.state, out=out)

    assert "SHIP: ABCDEF" in out.getvalue()
