"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, File, HTTPException, Query, UploadFile, status

from app.schemas import (
    ChartPointOut,
    CpuSummaryOut,
    CurrentReading,
    ImportResponse,
    IngestResponse,
    ReadingIn,
    ReadingOut,
    RollingStatsOut,
    RowErrorOut,
    SampleOut,
)
from services.dashboard import DashboardService, build_default_dashboard
from services.ingest import build_reading

router = APIRouter()


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


@router.post(
    "/readings",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=IngestResponse,
    summary="Append one reading from the data source.",
)
async def push_reading(
    payload: ReadingIn,
    dashboard: DashboardService = Depends(get_dashboard),
) -> IngestResponse:
    reading = build_reading(
        temperature=payload.temperature,
        humidity=payload.humidity,
        timestamp=payload.timestamp,
        time_label=payload.time_label,
    )
    return IngestResponse(history_size=dashboard.ingest(reading))


@router.post(
    "/readings/import",
    response_model=ImportResponse,
    summary="Append every parseable row of a CSV export.",
)
async def import_readings(
    file: UploadFile = File(..., description="CSV with timestamp, temperature, humidity columns."),
    dashboard: DashboardService = Depends(get_dashboard),
) -> ImportResponse:
    try:
        contents = await file.read()
    finally:
        await file.close()
    if not contents:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty.",
        )
    try:
        result = dashboard.import_csv(contents.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return ImportResponse(
        imported=len(result.readings),
        history_size=len(dashboard.store),
        errors=[RowErrorOut.model_validate(error) for error in result.errors],
    )


@router.post(
    "/readings/disconnect",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Signal that the data source has no data.",
)
async def disconnect(dashboard: DashboardService = Depends(get_dashboard)) -> None:
    dashboard.disconnect()


@router.get(
    "/readings/current",
    response_model=CurrentReading,
    summary="Latest reading and data source connection state.",
)
async def current_reading(dashboard: DashboardService = Depends(get_dashboard)) -> CurrentReading:
    reading = dashboard.current()
    if reading is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No readings have been received yet.",
        )
    return CurrentReading(
        reading=ReadingOut.model_validate(reading),
        connected=dashboard.store.connected,
        last_update=dashboard.store.last_update,
    )


@router.get(
    "/chart",
    response_model=List[ChartPointOut],
    summary="Ten-minute samples in chronological order.",
)
async def chart(dashboard: DashboardService = Depends(get_dashboard)) -> List[ChartPointOut]:
    return [ChartPointOut.model_validate(point) for point in dashboard.chart_series()]


@router.get(
    "/table",
    response_model=List[SampleOut],
    summary="Classified ten-minute samples, newest first.",
)
async def table(
    limit: Optional[int] = Query(None, ge=1, description="Maximum rows to return."),
    dashboard: DashboardService = Depends(get_dashboard),
) -> List[SampleOut]:
    return [SampleOut.model_validate(row) for row in dashboard.table_rows(limit)]


@router.get(
    "/stats",
    response_model=RollingStatsOut,
    summary="Average temperature and humidity over the last raw readings.",
)
async def stats(
    window: Optional[int] = Query(None, ge=1, description="Number of raw readings to average."),
    dashboard: DashboardService = Depends(get_dashboard),
) -> RollingStatsOut:
    return RollingStatsOut.model_validate(dashboard.rolling_stats(window))


@router.get(
    "/trend",
    response_model=List[ReadingOut],
    summary="Raw readings covering the trend window, oldest first.",
)
async def trend(dashboard: DashboardService = Depends(get_dashboard)) -> List[ReadingOut]:
    return [ReadingOut.model_validate(reading) for reading in dashboard.trend()]


@router.put(
    "/cpu",
    response_model=CpuSummaryOut,
    summary="Replace the CPU telemetry snapshot pushed by lab PCs.",
)
async def put_cpu_snapshot(
    payload: Dict[str, Any] = Body(..., description="Mapping of device id to its records."),
    dashboard: DashboardService = Depends(get_dashboard),
) -> CpuSummaryOut:
    dashboard.update_cpu_snapshot(payload)
    return CpuSummaryOut.model_validate(dashboard.cpu_summary())


@router.get(
    "/cpu",
    response_model=CpuSummaryOut,
    summary="Latest CPU temperature per lab PC.",
)
async def cpu_summary(dashboard: DashboardService = Depends(get_dashboard)) -> CpuSummaryOut:
    return CpuSummaryOut.model_validate(dashboard.cpu_summary())


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
