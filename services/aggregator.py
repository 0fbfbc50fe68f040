"""Windowed aggregation over reading history."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Literal, Optional, Sequence, TypeVar

from models.records import Reading, RollingStats

T = TypeVar("T")

ReadingField = Literal["temperature", "humidity"]

DEFAULT_SPAN = timedelta(hours=24)
DEFAULT_CADENCE = timedelta(minutes=10)


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def average(self, field: ReadingField, readings: Sequence[Reading]) -> Optional[float]:
        """Arithmetic mean of ``field``; ``None`` when there is nothing to average.

        Non-finite values are skipped so NaN never reaches a caller.
        """
        if field not in ("temperature", "humidity"):
            raise ValueError(f"Unsupported reading field: {field!r}")

        total = 0.0
        count = 0
        for reading in readings:
            value = getattr(reading, field)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            if not math.isfinite(value):
                continue
            total += value
            count += 1

        if not count:
            return None
        return total / count

    def last_n(self, history: Sequence[T], n: int) -> list[T]:
        if n <= 0:
            return []
        return list(history[-n:])

    def last_duration_window(
        self,
        history: Sequence[T],
        span: timedelta = DEFAULT_SPAN,
        cadence: timedelta = DEFAULT_CADENCE,
    ) -> list[T]:
        """Suffix of history assumed to cover ``span``.

        This is a count-based slice of ``span // cadence`` entries, not a
        timestamp filter. Gaps or a faster cadence make the window cover less
        or more wall-clock time than ``span``.
        """
        if cadence <= timedelta(0):
            raise ValueError("Cadence must be a positive duration.")
        return self.last_n(history, span // cadence)

    def rolling_stats(self, history: Sequence[Reading], window_size: int) -> RollingStats:
        window = self.last_n(history, window_size)
        return RollingStats(
            window_size=window_size,
            sample_count=len(window),
            avg_temperature=self.average("temperature", window),
            avg_humidity=self.average("humidity", window),
        )
