"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.records import ActuatorAction, CpuStatus, SampleStatus


class ReadingIn(BaseModel):
    """One reading pushed by the data source.

    Values are accepted as-is, including out-of-range or non-finite ones;
    derived views filter them out.
    """

    model_config = ConfigDict(allow_inf_nan=True)

    temperature: float = Field(..., description="Degrees Celsius.")
    humidity: float = Field(..., description="Relative humidity in percent.")
    timestamp: Optional[datetime] = Field(
        default=None, description="Capture time; server time when omitted."
    )
    time_label: Optional[str] = Field(
        default=None, description="HH:MM label; derived from timestamp when omitted."
    )


class ReadingOut(BaseModel):
    """A stored reading; non-finite values are reported as ``null``."""

    model_config = ConfigDict(from_attributes=True)

    timestamp: datetime
    time_label: str
    temperature: Optional[float] = None
    humidity: Optional[float] = None

    @field_validator("temperature", "humidity", mode="before")
    @classmethod
    def _drop_non_finite(cls, value: Any) -> Any:
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value


class IngestResponse(BaseModel):
    """Immediate response payload after appending a reading."""

    history_size: int = Field(..., ge=0)


class RowErrorOut(BaseModel):
    """Details about a CSV row that could not become a reading."""

    model_config = ConfigDict(from_attributes=True)

    row_number: int = Field(..., ge=1)
    reason: str


class ImportResponse(BaseModel):
    imported: int = Field(..., ge=0)
    history_size: int = Field(..., ge=0)
    errors: List[RowErrorOut] = Field(default_factory=list)


class CurrentReading(BaseModel):
    """Latest reading with the data source connection state."""

    reading: ReadingOut
    connected: bool
    last_update: Optional[datetime] = None


class ChartPointOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    time_label: str
    temperature: float
    humidity: float


class SampleOut(BaseModel):
    """A classified ten-minute sample, newest first by ``index``."""

    model_config = ConfigDict(from_attributes=True)

    index: int = Field(..., ge=0)
    time_label: str
    temperature: float
    humidity: float
    actuator_action: ActuatorAction
    status: SampleStatus


class RollingStatsOut(BaseModel):
    """Averages over the last raw readings; ``null`` means no data."""

    model_config = ConfigDict(from_attributes=True)

    window_size: int = Field(..., ge=0)
    sample_count: int = Field(..., ge=0)
    avg_temperature: Optional[float] = None
    avg_humidity: Optional[float] = None


class CpuReadingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    device_id: str
    temperature: float
    date: Optional[str] = None
    time: Optional[str] = None
    timestamp: Optional[datetime] = None
    status: CpuStatus


class CpuSummaryOut(BaseModel):
    """Latest CPU temperature per lab PC plus fleet-wide figures."""

    model_config = ConfigDict(from_attributes=True)

    connected: bool
    devices: List[CpuReadingOut] = Field(default_factory=list)
    connected_devices: List[str] = Field(default_factory=list)
    average_temperature: Optional[float] = None
    max_temperature: Optional[float] = None
