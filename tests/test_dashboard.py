from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from datastore.reading_store import ReadingStore
from models.records import ActuatorAction, Reading, SampleStatus
from services.aggregator import Aggregator
from services.dashboard import DashboardService
from services.ingest import build_reading

_BASE = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)


@pytest.fixture()
def dashboard() -> DashboardService:
    return DashboardService(store=ReadingStore(capacity=50), aggregator=Aggregator())


def _at(minute: int, temperature: float, humidity: float = 60.0) -> Reading:
    return build_reading(temperature, humidity, timestamp=_BASE + timedelta(minutes=minute))


def test_end_to_end_cadence_and_classification(dashboard: DashboardService) -> None:
    dashboard.ingest(build_reading(27.5, 65, time_label="10:10"))
    dashboard.ingest(build_reading(30, 70, time_label="10:11"))

    chart = dashboard.chart_series()
    rows = dashboard.table_rows()

    assert [(point.time_label, point.temperature) for point in chart] == [("10:10", 27.5)]
    assert len(rows) == 1
    assert rows[0].index == 0
    assert rows[0].status is SampleStatus.warning
    assert rows[0].actuator_action is ActuatorAction.active_cooling
    assert dashboard.current().temperature == 30.0


def test_table_rows_use_configured_default_limit() -> None:
    service = DashboardService(store=ReadingStore(capacity=500), aggregator=Aggregator(), table_row_limit=10)
    for step in range(15):
        service.ingest(_at(step * 10, 20.0))

    rows = service.table_rows()

    assert len(rows) == 10
    assert rows[0].time_label == "12:20"
    assert len(service.table_rows(3)) == 3


def test_rolling_stats_cover_raw_readings(dashboard: DashboardService) -> None:
    dashboard.ingest(_at(1, 20.0, 40.0))
    dashboard.ingest(_at(2, 30.0, 80.0))

    stats = dashboard.rolling_stats()

    assert stats.sample_count == 2
    assert stats.avg_temperature == 25.0
    assert stats.avg_humidity == 60.0


def test_trend_is_limited_to_span_over_cadence() -> None:
    service = DashboardService(
        store=ReadingStore(capacity=500),
        aggregator=Aggregator(),
        trend_span=timedelta(hours=1),
        trend_cadence=timedelta(minutes=10),
    )
    for minute in range(20):
        service.ingest(_at(minute, 21.0))

    trend = service.trend()

    assert len(trend) == 6
    assert trend[-1] == service.current()


def test_recompute_builds_consistent_view(dashboard: DashboardService) -> None:
    empty = dashboard.recompute()
    assert empty.current is None
    assert empty.chart == []
    assert empty.table == []
    assert empty.stats.avg_temperature is None
    assert empty.history_size == 0

    dashboard.ingest(_at(0, 24.0))
    dashboard.ingest(_at(5, 24.0))
    dashboard.disconnect()
    view = dashboard.recompute()

    assert view.history_size == 2
    assert view.connected is False
    assert view.current is not None
    assert len(view.chart) == len(view.table) == 1


def test_import_csv_appends_parseable_rows(dashboard: DashboardService) -> None:
    csv_body = (
        "timestamp,temperature,humidity\n"
        "2024-01-01T10:00:00Z,24.0,60\n"
        "2024-01-01T10:10:00Z,oops,60\n"
        "2024-01-01T10:20:00Z,25.0,61\n"
    )

    result = dashboard.import_csv(csv_body)

    assert len(result.readings) == 2
    assert len(result.errors) == 1
    assert [point.time_label for point in dashboard.chart_series()] == ["10:00", "10:20"]


def test_cpu_snapshot_is_copied_on_update(dashboard: DashboardService) -> None:
    snapshot = {"pc-01": {"a": {"suhu": 72.0, "timestamp": "2024-01-01T10:00:00Z"}}}

    dashboard.update_cpu_snapshot(snapshot)
    snapshot["pc-01"]["a"]["suhu"] = 10.0
    summary = dashboard.cpu_summary()

    assert summary.devices[0].temperature == 72.0

    dashboard.update_cpu_snapshot({})
    assert dashboard.cpu_summary().connected is False


def test_import_csv_survives_failing_listener(dashboard: DashboardService) -> None:
    calls: list[int] = []

    def flaky(store: ReadingStore) -> None:
        calls.append(len(store))
        if len(calls) == 2:
            raise RuntimeError("listener failed")

    dashboard.store.subscribe(flaky)
    csv_body = "timestamp,temperature,humidity\n" + "".join(
        f"2024-01-01T10:{minute:02d}:00Z,24.0,60\n" for minute in (0, 10, 20, 30)
    )

    result = dashboard.import_csv(csv_body)

    assert len(result.readings) == 4
    assert len(dashboard.store) == 4
    assert calls == [1, 2, 3, 4]


def test_recompute_reads_store_state_once(dashboard: DashboardService, monkeypatch) -> None:
    dashboard.ingest(_at(0, 24.0))
    calls: list[str] = []
    original_state = dashboard.store.state

    def tracking_state():
        calls.append("state")
        return original_state()

    monkeypatch.setattr(dashboard.store, "state", tracking_state)

    view = dashboard.recompute()

    assert calls == ["state"]
    assert view.connected is True
    assert view.last_update is not None
    assert view.history_size == 1
