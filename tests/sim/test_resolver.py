from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tests.helpers.strategies import ordered_pair_strategy
from webb_deploy.rules.schedule import default_rules
from webb_deploy.sim.resolver import event_progress, resolve_event, resolve_event_index


def test_bounds() -> None:
    assert resolve_event_index(0.0, 10) == 0
    assert resolve_event_index(1.0, 10) == 9
    assert resolve_event_index(0.5, 10) == 4
    assert resolve_event_index(0.0, 1) == 0
    assert resolve_event_index(1.0, 1) == 0


def test_out_of_range_progress_is_clamped_first() -> None:
    assert resolve_event_index(-2.0, 10) == 0
    assert resolve_event_index(7.5, 10) == 9
    assert resolve_event_index(math.nan, 10) == 0


def test_empty_timeline_is_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_event_index(0.5, 0)
    with pytest.raises(ValueError):
        event_progress(0, 0)


def test_event_progress_clamps_index() -> None:
    assert event_progress(-3, 10) == 0.0
    assert event_progress(42, 10) == 1.0
    assert event_progress(3, 1) == 0.0


@given(st.integers(min_value=1, max_value=200))
def test_event_progress_round_trips(count: int) -> None:
    for index in range(count):
        assert resolve_event_index(event_progress(index, count), count) == index


@given(ordered_pair_strategy(), st.integers(min_value=1, max_value=50))
def test_resolution_is_monotonic(pair: tuple[float, float], count: int) -> None:
    low, high = pair
    assert resolve_event_index(low, count) <= resolve_event_index(high, count)
    assert 0 <= resolve_event_index(high, count) <= count - 1


def test_resolve_event_returns_timeline_entry() -> None:
    timeline = default_rules().timeline
    assert resolve_event(0.0, timeline).label == "Launch"
    assert resolve_event(1.0, timeline).label == "Deployment Complete"
