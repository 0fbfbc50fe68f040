"""Coordinates the reading store with the derived dashboard views."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache
from threading import Lock
from typing import Any, List, Mapping, Optional

from datastore.reading_store import ReadingStore, build_default_store
from models.records import ChartPoint, Reading, RollingStats, Sample
from services.aggregator import Aggregator
from services.cpu_monitor import CpuSummary, summarize_cpu_snapshot
from services.ingest import CsvImportResult, parse_csv_readings
from services.sampling import chart_series, table_rows
from settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    """Every derived view computed from one history snapshot."""

    current: Optional[Reading]
    connected: bool
    last_update: Optional[datetime]
    chart: List[ChartPoint]
    table: List[Sample]
    stats: RollingStats
    history_size: int


class DashboardService:
    """Feeds readings into the store and serves views over its snapshots."""

    def __init__(
        self,
        store: ReadingStore,
        aggregator: Aggregator,
        table_row_limit: int = 10,
        rolling_window_size: int = 100,
        trend_span: timedelta = timedelta(hours=24),
        trend_cadence: timedelta = timedelta(minutes=10),
        cpu_device_limit: int = 50,
    ) -> None:
        self.store = store
        self.aggregator = aggregator
        self.table_row_limit = table_row_limit
        self.rolling_window_size = rolling_window_size
        self.trend_span = trend_span
        self.trend_cadence = trend_cadence
        self.cpu_device_limit = cpu_device_limit
        self._cpu_snapshot: Optional[Mapping[str, Mapping[str, Any]]] = None
        self._cpu_lock = Lock()

    def ingest(self, reading: Reading) -> int:
        """Append one reading and return the resulting history size."""
        self.store.append(reading)
        return len(self.store)

    def import_csv(self, text: str) -> CsvImportResult:
        result = parse_csv_readings(text)
        for reading in result.readings:
            self.store.append(reading)
        logger.info(
            "Imported readings from CSV",
            extra={
                "row_count": len(result.readings),
                "error_count": len(result.errors),
                "history_size": len(self.store),
            },
        )
        return result

    def disconnect(self) -> None:
        self.store.mark_disconnected()

    def current(self) -> Optional[Reading]:
        return self.store.current()

    def chart_series(self) -> List[ChartPoint]:
        return chart_series(self.store.snapshot())

    def table_rows(self, limit: Optional[int] = None) -> List[Sample]:
        row_limit = self.table_row_limit if limit is None else limit
        return table_rows(self.store.snapshot(), limit=row_limit)

    def rolling_stats(self, window_size: Optional[int] = None) -> RollingStats:
        size = self.rolling_window_size if window_size is None else window_size
        return self.aggregator.rolling_stats(self.store.snapshot(), size)

    def trend(self) -> List[Reading]:
        """Raw readings covering roughly the trend span, oldest first."""
        return self.aggregator.last_duration_window(
            self.store.snapshot(), span=self.trend_span, cadence=self.trend_cadence
        )

    def recompute(self) -> DashboardView:
        """Build all views from a single snapshot so they agree with each other."""
        state = self.store.state()
        snapshot = state.history
        return DashboardView(
            current=snapshot[-1] if snapshot else None,
            connected=state.connected,
            last_update=state.last_update,
            chart=chart_series(snapshot),
            table=table_rows(snapshot, limit=self.table_row_limit),
            stats=self.aggregator.rolling_stats(snapshot, self.rolling_window_size),
            history_size=len(snapshot),
        )

    def update_cpu_snapshot(self, snapshot: Optional[Mapping[str, Mapping[str, Any]]]) -> None:
        """Replace the CPU telemetry snapshot; ``None`` or empty means no data."""
        with self._cpu_lock:
            self._cpu_snapshot = copy.deepcopy(snapshot) if snapshot else None

    def cpu_summary(self) -> CpuSummary:
        with self._cpu_lock:
            snapshot = self._cpu_snapshot
        return summarize_cpu_snapshot(snapshot, device_limit=self.cpu_device_limit)


@lru_cache
def build_default_dashboard() -> DashboardService:
    """Factory that wires the dashboard with the default store."""
    settings = get_settings()
    return DashboardService(
        store=build_default_store(),
        aggregator=Aggregator(),
        table_row_limit=settings.table_row_limit,
        rolling_window_size=settings.rolling_window_size,
        trend_span=timedelta(hours=settings.trend_span_hours),
        trend_cadence=timedelta(minutes=settings.trend_cadence_minutes),
        cpu_device_limit=settings.cpu_device_limit,
    )
