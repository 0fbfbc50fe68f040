"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ActuatorAction(str, Enum):
    """Simulated air-conditioner action derived from a sample's temperature."""

    active_cooling = "ACTIVE_COOLING"
    standby = "STANDBY"


class SampleStatus(str, Enum):
    """Operational status of a room-environment sample."""

    normal = "NORMAL"
    caution = "CAUTION"
    warning = "WARNING"


class CpuStatus(str, Enum):
    """Status bands for a lab PC's CPU temperature."""

    cool = "COOL"
    normal = "NORMAL"
    warning = "WARNING"
    critical = "CRITICAL"


@dataclass(frozen=True, slots=True)
class Reading:
    """A single room-environment observation as delivered by the data source.

    Readings are stored exactly as received; out-of-range or non-finite values
    are only filtered out when samples are derived.
    """

    timestamp: datetime
    time_label: str
    temperature: float
    humidity: float


@dataclass(frozen=True, slots=True)
class Sample:
    """A classified, fixed-cadence projection of a valid reading."""

    index: int
    time_label: str
    temperature: float
    humidity: float
    actuator_action: ActuatorAction
    status: SampleStatus


@dataclass(frozen=True, slots=True)
class ChartPoint:
    time_label: str
    temperature: float
    humidity: float


@dataclass(frozen=True, slots=True)
class RollingStats:
    """Averages over a window of raw readings; ``None`` means no data."""

    window_size: int
    sample_count: int
    avg_temperature: Optional[float] = None
    avg_humidity: Optional[float] = None


@dataclass(frozen=True, slots=True)
class CpuReading:
    """Latest CPU temperature reported by one lab PC."""

    device_id: str
    temperature: float
    date: Optional[str]
    time: Optional[str]
    timestamp: Optional[datetime]
    status: CpuStatus
