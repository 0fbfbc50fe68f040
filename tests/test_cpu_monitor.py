from __future__ import annotations

import pytest

from models.records import CpuStatus
from services.cpu_monitor import classify_cpu_temperature, summarize_cpu_snapshot


def _record(suhu, timestamp: str, waktu: str = "10:00:00") -> dict:
    return {"suhu": suhu, "tanggal": "2024-01-01", "waktu": waktu, "timestamp": timestamp}


@pytest.mark.parametrize(
    ("temperature", "status"),
    [
        (49.9, CpuStatus.cool),
        (50.0, CpuStatus.normal),
        (70.0, CpuStatus.normal),
        (70.5, CpuStatus.warning),
        (80.0, CpuStatus.warning),
        (80.1, CpuStatus.critical),
    ],
)
def test_cpu_status_bands(temperature: float, status: CpuStatus) -> None:
    assert classify_cpu_temperature(temperature) is status


def test_empty_snapshot_is_disconnected() -> None:
    for snapshot in (None, {}):
        summary = summarize_cpu_snapshot(snapshot)
        assert summary.connected is False
        assert summary.devices == []
        assert summary.average_temperature is None
        assert summary.max_temperature is None


def test_latest_record_per_device_is_selected() -> None:
    snapshot = {
        "pc-01": {
            "a": _record(55.0, "2024-01-01T10:00:00"),
            "b": _record(82.0, "2024-01-01T10:05:00", waktu="10:05:00"),
            "c": _record(60.0, "2024-01-01T09:55:00"),
        },
        "pc-02": {
            "a": {"temperature": 45.0, "date": "2024-01-01", "time": "10:01:00", "timestamp": "2024-01-01T10:01:00Z"},
        },
    }

    summary = summarize_cpu_snapshot(snapshot)

    assert summary.connected is True
    assert summary.connected_devices == ["pc-01", "pc-02"]
    by_device = {device.device_id: device for device in summary.devices}
    assert by_device["pc-01"].temperature == 82.0
    assert by_device["pc-01"].time == "10:05:00"
    assert by_device["pc-01"].status is CpuStatus.critical
    assert by_device["pc-02"].status is CpuStatus.cool
    assert sorted(summary.all_temperatures) == [45.0, 55.0, 60.0, 82.0]
    assert summary.average_temperature == pytest.approx(60.5)
    assert summary.max_temperature == 82.0


def test_records_without_timestamp_or_number_are_ignored() -> None:
    snapshot = {
        "pc-01": {
            "a": _record("hot", "2024-01-01T10:00:00"),
            "b": {"suhu": 65.0},
        },
        "pc-02": "garbage",
    }

    summary = summarize_cpu_snapshot(snapshot)

    assert summary.devices == []
    assert summary.connected_devices == ["pc-01", "pc-02"]
    assert summary.all_temperatures == [65.0]


def test_device_list_is_truncated() -> None:
    snapshot = {f"pc-{i:02d}": {"a": _record(60.0, "2024-01-01T10:00:00")} for i in range(5)}

    summary = summarize_cpu_snapshot(snapshot, device_limit=3)

    assert len(summary.devices) == 3
    assert len(summary.connected_devices) == 5
