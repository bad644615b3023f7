"""
BookingState publication tests.
"""

from datetime import datetime, timezone

import pytest

from src.domain.errors import NetworkError
from src.state import BookingState
from tests.contracts.sample_booking import sample_record


@pytest.fixture
def state():
    return BookingState()


@pytest.fixture
def events(state):
    received = []
    state.subscribe(lambda field, value: received.append((field, value)))
    return received


def test_initial_state_is_empty(state):
    assert state.record is None
    assert state.is_loading is False
    assert state.error is None
    assert state.last_updated is None


def test_each_field_is_published_separately(state, events):
    record = sample_record()
    now = datetime.now(timezone.utc)
    state.is_loading = True
    state.record = record
    state.last_updated = now
    state.is_loading = False
    assert events == [
        ("is_loading", True),
        ("record", record),
        ("last_updated", now),
        ("is_loading", False),
    ]


def test_unchanged_value_is_not_republished(state, events):
    state.error = NetworkError("x")
    state.error = NetworkError("x")
    state.is_loading = False
    assert events == [("error", NetworkError("x"))]


def test_unsubscribe_stops_delivery(state):
    received = []
    unsubscribe = state.subscribe(lambda f, v: received.append(f))
    state.is_loading = True
    unsubscribe()
    unsubscribe()
    state.is_loading = False
    assert received == ["is_loading"]


def test_failing_subscriber_does_not_block_others(state):
    received = []

    def broken(field, value):
        raise RuntimeError("boom")

    state.subscribe(broken)
    state.subscribe(lambda f, v: received.append(f))
    state.record = sample_record()
    assert received == ["record"]
    assert state.record == sample_record()


def test_status_description(state):
    assert state.status_description == "No data available"
    state.last_updated = datetime(2026, 1, 2, 3, 4, tzinfo=timezone.utc)
    assert state.status_description.startswith("Last updated: ")
    state.error = NetworkError("offline")
    assert state.status_description == "Error: Network Error: offline"
    state.is_loading = True
    assert state.status_description == "Loading..."


def test_derived_helpers(state):
    assert state.ship_reference == "N/A"
    assert state.duration_description == "N/A"
    assert state.segments_count == 0
    assert state.has_valid_data is False

    state.record = sample_record(duration=125)
    assert state.ship_reference == "ABCDEF"
    assert state.duration_description == "2h 5m"
    assert state.segments_count == 2
    assert state.has_valid_data is True

    state.error = NetworkError("x")
    assert state.has_valid_data is False
