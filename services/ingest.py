"""Turning inbound payloads from the data source into readings."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from models.records import Reading

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = frozenset({"timestamp", "temperature", "humidity"})


@dataclass(frozen=True)
class RowError:
    row_number: int
    reason: str


@dataclass
class CsvImportResult:
    readings: List[Reading] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)


def parse_timestamp(value: str) -> datetime:
    candidate = value.strip()
    if not candidate:
        raise ValueError("Timestamp is empty.")

    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError("Invalid timestamp format") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed.astimezone(timezone.utc)


def derive_time_label(timestamp: datetime) -> str:
    return timestamp.strftime("%H:%M")


def build_reading(
    temperature: float,
    humidity: float,
    timestamp: Optional[datetime] = None,
    time_label: Optional[str] = None,
) -> Reading:
    """Assemble a reading, filling in the capture time and label when absent.

    Timestamps are normalized to UTC, so derived labels are UTC wall-clock.

    No range checks happen here; invalid values are stored and filtered later.
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    elif timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    else:
        timestamp = timestamp.astimezone(timezone.utc)

    label = (time_label or "").strip() or derive_time_label(timestamp)
    return Reading(
        timestamp=timestamp,
        time_label=label,
        temperature=float(temperature),
        humidity=float(humidity),
    )


def parse_csv_readings(text: str) -> CsvImportResult:
    """Parse a CSV export of readings, collecting per-row errors.

    Raises ``ValueError`` when the header is missing or lacks a required
    column. Rows that cannot become a reading are skipped and reported.
    """
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        raise ValueError("CSV file is missing a header row.")

    normalized = {name.lower().strip(): name for name in reader.fieldnames if name}
    missing = sorted(REQUIRED_COLUMNS - normalized.keys())
    if missing:
        raise ValueError(f"CSV missing required columns: {', '.join(missing)}")

    timestamp_col = normalized["timestamp"]
    temperature_col = normalized["temperature"]
    humidity_col = normalized["humidity"]
    label_col = normalized.get("time_label")

    result = CsvImportResult()
    for row_number, row in enumerate(reader, start=2):
        timestamp_raw = (row.get(timestamp_col) or "").strip()
        temperature_raw = (row.get(temperature_col) or "").strip()
        humidity_raw = (row.get(humidity_col) or "").strip()
        label_raw = (row.get(label_col) or "").strip() if label_col else ""

        reason: Optional[str] = None
        invalid_value: Optional[str] = None
        timestamp: Optional[datetime] = None
        temperature = humidity = 0.0

        if not timestamp_raw:
            reason = "missing timestamp"
        else:
            try:
                timestamp = parse_timestamp(timestamp_raw)
            except ValueError:
                reason, invalid_value = "invalid timestamp", timestamp_raw

        if reason is None:
            if not temperature_raw:
                reason = "missing temperature"
            elif not humidity_raw:
                reason = "missing humidity"

        if reason is None:
            try:
                temperature = float(temperature_raw)
                humidity = float(humidity_raw)
            except ValueError:
                reason = "invalid numeric value"
                invalid_value = f"{temperature_raw},{humidity_raw}"

        if reason is not None:
            logger.warning(
                "Skipping row: %s",
                reason,
                extra={"row_number": row_number, "reason": reason, "invalid_value": invalid_value},
            )
            result.errors.append(RowError(row_number=row_number, reason=reason))
            continue

        result.readings.append(
            build_reading(
                temperature=temperature,
                humidity=humidity,
                timestamp=timestamp,
                time_label=label_raw or None,
            )
        )

    return result
