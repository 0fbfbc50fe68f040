"""Unit tests for the aggregation logic."""

from __future__ import annotations

import math
from datetime import datetime, timedelta

import pytest

from models.records import Reading
from services.aggregator import Aggregator


def _reading(temperature: float, humidity: float = 50.0) -> Reading:
    """Helper to build deterministic readings."""

    return Reading(
        timestamp=datetime(2024, 1, 1),
        time_label="10:00",
        temperature=temperature,
        humidity=humidity,
    )


def test_average_of_empty_sequence_is_none() -> None:
    aggregator = Aggregator()

    assert aggregator.average("temperature", []) is None
    assert aggregator.average("humidity", []) is None


def test_average_distinguishes_zero_from_no_data() -> None:
    aggregator = Aggregator()

    assert aggregator.average("temperature", [_reading(-1.0), _reading(1.0)]) == 0.0


def test_average_skips_non_finite_values() -> None:
    aggregator = Aggregator()
    readings = [_reading(20.0, math.nan), _reading(math.inf, 40.0), _reading(22.0, 60.0)]

    assert aggregator.average("temperature", readings) == 21.0
    assert aggregator.average("humidity", readings) == 50.0
    assert aggregator.average("temperature", [_reading(math.nan)]) is None


def test_average_rejects_unknown_field() -> None:
    with pytest.raises(ValueError):
        Aggregator().average("pressure", [_reading(20.0)])  # type: ignore[arg-type]


def test_last_n_returns_suffix_in_order() -> None:
    aggregator = Aggregator()
    history = list(range(10))

    assert aggregator.last_n(history, 3) == [7, 8, 9]
    assert aggregator.last_n(history, 50) == history
    assert aggregator.last_n(history, 0) == []
    assert aggregator.last_n([], 5) == []


def test_last_duration_window_is_count_based() -> None:
    aggregator = Aggregator()
    history = list(range(200))

    window = aggregator.last_duration_window(history)

    assert len(window) == 144
    assert window[0] == 56
    assert aggregator.last_duration_window(
        history, span=timedelta(hours=1), cadence=timedelta(minutes=10)
    ) == [194, 195, 196, 197, 198, 199]


def test_last_duration_window_rejects_zero_cadence() -> None:
    with pytest.raises(ValueError):
        Aggregator().last_duration_window([1, 2], cadence=timedelta(0))


def test_rolling_stats_uses_raw_window() -> None:
    aggregator = Aggregator()
    history = [_reading(10.0, 10.0)] + [_reading(30.0, 70.0) for _ in range(3)]

    stats = aggregator.rolling_stats(history, window_size=3)

    assert stats.window_size == 3
    assert stats.sample_count == 3
    assert stats.avg_temperature == 30.0
    assert stats.avg_humidity == 70.0


def test_rolling_stats_on_empty_history() -> None:
    stats = Aggregator().rolling_stats([], window_size=100)

    assert stats.sample_count == 0
    assert stats.avg_temperature is None
    assert stats.avg_humidity is None
