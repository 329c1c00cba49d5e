"""FastAPI dependency injection for shared resources."""

from __future__ import annotations

from stride_track.services.connection_manager import ConnectionManager

# Singleton connection manager for dashboard WebSocket clients
dashboard_manager = ConnectionManager()
