"""Validity and fixed-cadence filtering of reading history."""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from models.records import ChartPoint, Reading, Sample
from services.classification import classify_action, classify_status

CADENCE_MINUTES = frozenset({0, 10, 20, 30, 40, 50})

TEMPERATURE_MIN_EXCLUSIVE = -50.0
TEMPERATURE_MAX_EXCLUSIVE = 100.0
HUMIDITY_MIN = 0.0
HUMIDITY_MAX = 100.0


def is_valid(reading: Reading) -> bool:
    """True when both fields are finite numbers inside the physical range."""
    temperature = reading.temperature
    humidity = reading.humidity
    if isinstance(temperature, bool) or isinstance(humidity, bool):
        return False
    if not isinstance(temperature, (int, float)) or not isinstance(humidity, (int, float)):
        return False
    if not (math.isfinite(temperature) and math.isfinite(humidity)):
        return False
    return (
        TEMPERATURE_MIN_EXCLUSIVE < temperature < TEMPERATURE_MAX_EXCLUSIVE
        and HUMIDITY_MIN <= humidity <= HUMIDITY_MAX
    )


def is_cadence_mark(time_label: str) -> bool:
    """True when the label's minute field falls on a ten-minute boundary.

    ``"10:20"`` and ``"10:20:45"`` qualify, ``"10:21"`` and ``"1020"`` do not.
    """
    if not isinstance(time_label, str) or not time_label:
        return False
    parts = time_label.split(":")
    if len(parts) < 2:
        return False
    try:
        minute = int(parts[1].strip())
    except ValueError:
        return False
    return minute in CADENCE_MINUTES


def cadence_samples(history: Iterable[Reading]) -> List[Reading]:
    """Valid readings on the ten-minute cadence, in chronological order."""
    return [
        reading
        for reading in history
        if is_cadence_mark(reading.time_label) and is_valid(reading)
    ]


def chart_series(history: Iterable[Reading]) -> List[ChartPoint]:
    return [
        ChartPoint(
            time_label=reading.time_label,
            temperature=reading.temperature,
            humidity=reading.humidity,
        )
        for reading in cadence_samples(history)
    ]


def table_rows(history: Sequence[Reading], limit: int | None = None) -> List[Sample]:
    """Classified cadence samples, newest first, indexed from 0.

    Duplicate time labels are kept as they arrive.
    """
    if limit is not None and limit <= 0:
        return []

    newest_first = list(reversed(cadence_samples(history)))
    if limit is not None:
        newest_first = newest_first[:limit]

    return [
        Sample(
            index=index,
            time_label=reading.time_label,
            temperature=reading.temperature,
            humidity=reading.humidity,
            actuator_action=classify_action(reading.temperature),
            status=classify_status(reading.temperature),
        )
        for index, reading in enumerate(newest_first)
    ]
