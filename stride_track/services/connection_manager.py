"""Manages dashboard WebSocket connections that receive activity snapshots."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from stride_track.domain.state import ActivityState

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks connected dashboard clients and pushes state to them."""

    def __init__(self) -> None:
        self._connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.append(websocket)

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self._connections:
            self._connections.remove(websocket)

    @property
    def active_count(self) -> int:
        return len(self._connections)

    async def broadcast_json(self, data: dict[str, Any]) -> None:
        """Send a JSON payload to every connected dashboard client."""
        for ws in list(self._connections):
            try:
                await ws.send_json(data)
            except (RuntimeError, WebSocketDisconnect) as exc:
                logger.info("Dropping dashboard client: %s", exc)
                self.disconnect(ws)

    async def broadcast_state(self, state: ActivityState) -> None:
        if not self._connections:
            return
        await self.broadcast_json({"type": "activity", "state": state.summary()})
