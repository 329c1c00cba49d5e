"""stride-track — step, distance and hourly activity tracking.

This is the application entry point.  It wires the StepDetector,
ActivityAggregator, ActivityTracker, AdapterRegistry and the HTTP /
WebSocket endpoints together.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from stride_track.adapters.accelerometer import AccelerometerAdapter
from stride_track.adapters.geolocation import FixAdapter, GeolocationAdapter
from stride_track.adapters.registry import AdapterRegistry
from stride_track.api.dependencies import dashboard_manager
from stride_track.api.session import create_session_router
from stride_track.api.ws_activity import create_activity_stream_router
from stride_track.api.ws_sensor import create_sensor_router
from stride_track.config import settings
from stride_track.core.distance import DistanceAccumulator
from stride_track.core.step_detector import StepDetector
from stride_track.core.tracker import ActivityTracker
from stride_track.domain.enums import HistogramMode
from stride_track.services.ticker import run_hourly_ticker
from stride_track.store.activity_aggregator import ActivityAggregator

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

# ── Engine ───────────────────────────────────────────────────────────────────

detector = StepDetector(
    threshold=settings.step_threshold,
    min_step_interval=(
        timedelta(milliseconds=settings.min_step_interval_ms)
        if settings.min_step_interval_ms is not None
        else None
    ),
)

aggregator = ActivityAggregator(
    accumulator=DistanceAccumulator(radius=settings.earth_radius_m),
    histogram_mode=HistogramMode(settings.histogram_mode),
)

tracker = ActivityTracker(detector=detector, aggregator=aggregator)

# ── Adapter Registry ────────────────────────────────────────────────────────

registry = AdapterRegistry()
registry.register(AccelerometerAdapter())
registry.register(GeolocationAdapter())
registry.register(FixAdapter())

# ── Lifespan ─────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    ticker_task = None
    if settings.hourly_tick_enabled:
        ticker_task = asyncio.create_task(
            run_hourly_ticker(tracker, dashboard_manager, settings.hourly_tick_seconds)
        )
    yield
    if ticker_task is not None:
        ticker_task.cancel()
        try:
            await ticker_task
        except asyncio.CancelledError:
            pass


# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Step detection, distance accumulation and hourly activity histogram",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_session_router(
    tracker,
    dashboard_manager,
    accelerometer_interval_ms=settings.accelerometer_interval_ms,
    distance_filter_m=settings.distance_filter_m,
))
app.include_router(create_sensor_router(tracker, registry, dashboard_manager))
app.include_router(create_activity_stream_router(tracker, dashboard_manager))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    state = tracker.snapshot()
    return {
        "status": "ok",
        "tracking": tracker.status.value,
        "session_id": str(state.session_id),
        "step_count": state.step_count,
        "distance_m": round(state.total_distance, 2),
        "histogram_mode": aggregator.histogram_mode.value,
        "dashboard_clients": dashboard_manager.active_count,
        "adapters": registry.stats,
        "total_adapted": registry.total_accepted,
        "total_rejected": registry.total_rejected,
    }
