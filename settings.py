from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_HISTORY_CAPACITY_ENV = "READING_HISTORY_CAPACITY"
_TABLE_ROW_LIMIT_ENV = "TABLE_ROW_LIMIT"
_ROLLING_WINDOW_ENV = "ROLLING_WINDOW_SIZE"
_TREND_SPAN_ENV = "TREND_SPAN_HOURS"
_TREND_CADENCE_ENV = "TREND_CADENCE_MINUTES"
_CPU_DEVICE_LIMIT_ENV = "CPU_DEVICE_LIMIT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    history_capacity: int
    table_row_limit: int
    rolling_window_size: int
    trend_span_hours: int
    trend_cadence_minutes: int
    cpu_device_limit: int
    log_level: str


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        # one raw reading per minute for 24 hours
        history_capacity=_read_positive_int(_HISTORY_CAPACITY_ENV, 1440),
        table_row_limit=_read_positive_int(_TABLE_ROW_LIMIT_ENV, 10),
        rolling_window_size=_read_positive_int(_ROLLING_WINDOW_ENV, 100),
        trend_span_hours=_read_positive_int(_TREND_SPAN_ENV, 24),
        trend_cadence_minutes=_read_positive_int(_TREND_CADENCE_ENV, 10),
        cpu_device_limit=_read_positive_int(_CPU_DEVICE_LIMIT_ENV, 50),
        log_level=_read_log_level("INFO"),
    )
