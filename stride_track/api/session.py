"""REST endpoints for the tracking session and its activity totals.

Paths:
    GET  /api/session           tracking status, counters, sensor hints
    POST /api/session/start     begin a fresh session (totals reset)
    POST /api/session/stop      stop accepting sensor events
    GET  /api/activity          current snapshot for display
    POST /api/activity/tick     commit an hourly bucket
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from stride_track.core.tracker import ActivityTracker
from stride_track.domain.errors import ContractViolation
from stride_track.services.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


class TickRequest(BaseModel):
    """Body of POST /api/activity/tick.  Omit *hour* to use the server clock."""

    hour: Optional[int] = None


def create_session_router(
    tracker: ActivityTracker,
    manager: ConnectionManager | None = None,
    accelerometer_interval_ms: int = 400,
    distance_filter_m: float = 1.0,
) -> APIRouter:
    """Factory that wires the session endpoints to a concrete tracker.

    Args:
        tracker: The ActivityTracker owning the session.
        manager: Optional ConnectionManager to push state changes to dashboards.
        accelerometer_interval_ms: Sampling interval the host should request.
        distance_filter_m: Minimum movement the host's location watcher should report.
    """

    router = APIRouter(prefix="/api", tags=["activity"])

    def _session_info() -> dict[str, Any]:
        return {
            "status": tracker.status.value,
            "session_id": str(tracker.snapshot().session_id),
            "stats": tracker.stats,
            "sensors": {
                "accelerometer_interval_ms": accelerometer_interval_ms,
                "distance_filter_m": distance_filter_m,
            },
        }

    async def _push() -> None:
        if manager is not None:
            await manager.broadcast_state(tracker.snapshot())

    @router.get("/session")
    async def get_session() -> dict[str, Any]:
        return _session_info()

    @router.post("/session/start")
    async def start_session() -> dict[str, Any]:
        tracker.start()
        await _push()
        return _session_info()

    @router.post("/session/stop")
    async def stop_session() -> dict[str, Any]:
        state = tracker.stop()
        await _push()
        return {**_session_info(), "activity": state.summary()}

    @router.get("/activity")
    async def get_activity() -> dict[str, Any]:
        return tracker.snapshot().summary()

    @router.post("/activity/tick")
    async def tick(request: TickRequest | None = None) -> dict[str, Any]:
        try:
            if request is None or request.hour is None:
                hour = tracker.on_hour_tick()
            else:
                hour = request.hour
                tracker.commit_hour(hour)
        except ContractViolation as exc:
            logger.warning("Rejected hourly tick: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        await _push()
        state = tracker.snapshot()
        return {"hour": hour, "committed": state.hourly_history[hour], "activity": state.summary()}

    return router
