"""WebSocket endpoint: streams activity snapshots to dashboard clients."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from stride_track.core.tracker import ActivityTracker
from stride_track.services.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


def create_activity_stream_router(
    tracker: ActivityTracker,
    manager: ConnectionManager,
) -> APIRouter:
    """Dashboards connect here; the current state is sent on connect, then pushed on change."""

    router = APIRouter()

    @router.websocket("/ws/activity")
    async def stream_activity(websocket: WebSocket) -> None:
        await manager.connect(websocket)
        logger.info("Dashboard client connected — total: %d", manager.active_count)

        try:
            await websocket.send_json({"type": "activity", "state": tracker.snapshot().summary()})
            while True:
                # Keep the connection alive; state is pushed server-side
                await websocket.receive_text()

        except WebSocketDisconnect:
            manager.disconnect(websocket)
            logger.info("Dashboard client disconnected — total: %d", manager.active_count)

    return router
