"""Threshold classification of room temperature readings."""

from __future__ import annotations

from models.records import ActuatorAction, SampleStatus

# Degrees Celsius. Both comparisons are strict: 25.0 itself is still NORMAL.
COOLING_THRESHOLD_C = 25.0
WARNING_THRESHOLD_C = 26.0


def classify_action(temperature: float) -> ActuatorAction:
    if temperature > COOLING_THRESHOLD_C:
        return ActuatorAction.active_cooling
    return ActuatorAction.standby


def classify_status(temperature: float) -> SampleStatus:
    if temperature > WARNING_THRESHOLD_C:
        return SampleStatus.warning
    if temperature > COOLING_THRESHOLD_C:
        return SampleStatus.caution
    return SampleStatus.normal
