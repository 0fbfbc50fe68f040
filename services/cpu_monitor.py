"""Summaries of CPU temperatures pushed by lab PCs."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping, Optional

from models.records import CpuReading, CpuStatus
from services.ingest import parse_timestamp

logger = logging.getLogger(__name__)

CPU_CRITICAL_ABOVE_C = 80.0
CPU_WARNING_ABOVE_C = 70.0
CPU_COOL_BELOW_C = 50.0

# Lab PCs write Indonesian keys (suhu, tanggal, waktu); English names are accepted too.
_TEMPERATURE_KEYS = ("suhu", "temperature")
_DATE_KEYS = ("tanggal", "date")
_TIME_KEYS = ("waktu", "time")


@dataclass
class CpuSummary:
    devices: List[CpuReading] = field(default_factory=list)
    connected_devices: List[str] = field(default_factory=list)
    all_temperatures: List[float] = field(default_factory=list)
    average_temperature: Optional[float] = None
    max_temperature: Optional[float] = None
    connected: bool = False


def classify_cpu_temperature(temperature: float) -> CpuStatus:
    if temperature > CPU_CRITICAL_ABOVE_C:
        return CpuStatus.critical
    if temperature > CPU_WARNING_ABOVE_C:
        return CpuStatus.warning
    if temperature < CPU_COOL_BELOW_C:
        return CpuStatus.cool
    return CpuStatus.normal


def _first(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


def _numeric(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _record_time(record: Mapping[str, Any]) -> Optional[datetime]:
    raw = record.get("timestamp")
    if not isinstance(raw, str):
        return None
    try:
        return parse_timestamp(raw)
    except ValueError:
        return None


def summarize_cpu_snapshot(
    snapshot: Optional[Mapping[str, Mapping[str, Any]]],
    device_limit: int = 50,
) -> CpuSummary:
    """Reduce a ``{device_id: {record_key: record}}`` snapshot to one row per device.

    Each device contributes its record with the latest parseable timestamp.
    Every numeric temperature from every record lands in ``all_temperatures``.
    """
    if not snapshot:
        return CpuSummary()

    summary = CpuSummary(connected=True)
    for device_id, records in snapshot.items():
        summary.connected_devices.append(device_id)
        if not isinstance(records, Mapping):
            logger.warning("Ignoring malformed device entry", extra={"device_id": device_id})
            continue

        latest: Optional[Mapping[str, Any]] = None
        latest_time: Optional[datetime] = None
        for record in records.values():
            if not isinstance(record, Mapping):
                continue
            temperature = _numeric(_first(record, _TEMPERATURE_KEYS))
            if temperature is not None:
                summary.all_temperatures.append(temperature)
            recorded_at = _record_time(record)
            if recorded_at is None:
                continue
            if latest_time is None or recorded_at > latest_time:
                latest, latest_time = record, recorded_at

        if latest is None:
            continue
        temperature = _numeric(_first(latest, _TEMPERATURE_KEYS))
        if temperature is None:
            continue
        summary.devices.append(
            CpuReading(
                device_id=device_id,
                temperature=temperature,
                date=_text(_first(latest, _DATE_KEYS)),
                time=_text(_first(latest, _TIME_KEYS)),
                timestamp=latest_time,
                status=classify_cpu_temperature(temperature),
            )
        )

    summary.devices = summary.devices[:device_limit]
    if summary.all_temperatures:
        summary.average_temperature = sum(summary.all_temperatures) / len(summary.all_temperatures)
        summary.max_temperature = max(summary.all_temperatures)
    return summary
