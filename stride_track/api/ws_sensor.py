"""WebSocket endpoint for sensor event ingestion.

Path: /ws/sensor

Accepts raw JSON payloads from the host's accelerometer and location
watchers, routes them through the AdapterRegistry to produce canonical
samples, then forwards them into the ActivityTracker.  Each message gets a
minimal acknowledgement.  Malformed payloads are answered with an error and
the connection stays open.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from stride_track.adapters.registry import (
    AdaptationError,
    AdapterRegistry,
    NoAdapterFoundError,
)
from stride_track.core.tracker import ActivityTracker
from stride_track.domain.sample import AccelerationSample
from stride_track.services.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


def create_sensor_router(
    tracker: ActivityTracker,
    registry: AdapterRegistry,
    manager: ConnectionManager | None = None,
) -> APIRouter:
    """Factory that wires the sensor endpoint to tracker + registry."""

    router = APIRouter()

    @router.websocket("/ws/sensor")
    async def ingest_sensor(websocket: WebSocket) -> None:
        await websocket.accept()
        logger.info("Sensor source connected")

        try:
            while True:
                text = await websocket.receive_text()
                try:
                    raw = json.loads(text)
                except json.JSONDecodeError as exc:
                    await websocket.send_json({
                        "status": "error",
                        "reason": "invalid_json",
                        "detail": str(exc),
                    })
                    continue

                if not isinstance(raw, dict):
                    await websocket.send_json({
                        "status": "error",
                        "reason": "not_an_object",
                        "detail": "Sensor payload must be a JSON object",
                    })
                    continue

                # ── Route through adapter registry ───────────────────────
                try:
                    event = registry.adapt(raw)
                except NoAdapterFoundError as exc:
                    await websocket.send_json({
                        "status": "error",
                        "reason": "no_adapter",
                        "detail": str(exc),
                    })
                    continue
                except AdaptationError as exc:
                    await websocket.send_json({
                        "status": "error",
                        "reason": "adaptation_failed",
                        "adapter": exc.adapter_name,
                        "detail": exc.reason,
                    })
                    continue

                # ── Forward into tracker ─────────────────────────────────
                tracking = tracker.is_tracking
                if isinstance(event, AccelerationSample):
                    step = tracker.on_acceleration(event)
                    ack = {"status": "accepted", "kind": "acceleration", "step": step}
                    changed = step
                else:
                    delta = tracker.on_position(event)
                    ack = {"status": "accepted", "kind": "position", "delta_m": delta}
                    changed = delta > 0

                if not tracking:
                    await websocket.send_json({"status": "ignored", "reason": "not_tracking"})
                    continue

                state = tracker.snapshot()
                ack["step_count"] = state.step_count
                ack["distance_m"] = round(state.total_distance, 2)
                await websocket.send_json(ack)

                if changed and manager is not None:
                    await manager.broadcast_state(state)

        except WebSocketDisconnect:
            logger.info("Sensor source disconnected")

    return router
