from __future__ import annotations

import pytest

from models.records import ActuatorAction, SampleStatus
from services.classification import (
    COOLING_THRESHOLD_C,
    WARNING_THRESHOLD_C,
    classify_action,
    classify_status,
)


@pytest.mark.parametrize(
    ("temperature", "status", "action"),
    [
        (18.0, SampleStatus.normal, ActuatorAction.standby),
        (25.0, SampleStatus.normal, ActuatorAction.standby),
        (25.01, SampleStatus.caution, ActuatorAction.active_cooling),
        (26.0, SampleStatus.caution, ActuatorAction.active_cooling),
        (26.01, SampleStatus.warning, ActuatorAction.active_cooling),
        (-10.0, SampleStatus.normal, ActuatorAction.standby),
    ],
)
def test_threshold_boundaries(temperature: float, status: SampleStatus, action: ActuatorAction) -> None:
    assert classify_status(temperature) is status
    assert classify_action(temperature) is action


def test_thresholds_are_named_constants() -> None:
    assert COOLING_THRESHOLD_C == 25.0
    assert WARNING_THRESHOLD_C == 26.0


def test_enum_values_are_wire_labels() -> None:
    assert SampleStatus.warning.value == "WARNING"
    assert ActuatorAction.active_cooling.value == "ACTIVE_COOLING"
