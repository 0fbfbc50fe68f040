from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from datastore.reading_store import ReadingStore, build_default_store
from logging_config import configure_logging
from services.dashboard import build_default_dashboard

logger = logging.getLogger(__name__)


def _log_history_change(store: ReadingStore) -> None:
    current = store.current()
    logger.debug(
        "History changed",
        extra={
            "history_size": len(store),
            "connected": store.connected,
            "time_label": current.time_label if current else None,
        },
    )


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    dashboard = build_default_dashboard()
    unsubscribe = dashboard.store.subscribe(_log_history_change)
    try:
        yield
    finally:
        unsubscribe()
        build_default_dashboard.cache_clear()
        build_default_store.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Lab Telemetry Dashboard",
        description="Room-environment and CPU telemetry with ten-minute sampling and rolling averages.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app


app = create_app()
