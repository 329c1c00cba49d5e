"""Hourly ticker — the host-side timer that commits hourly buckets.

The engine never schedules anything itself.  This coroutine is the host's
equivalent of a background timer: it sleeps for the configured interval,
asks the tracker to commit the current local hour, and pushes the new state
to dashboard clients.  It runs until cancelled.
"""

from __future__ import annotations

import asyncio
import logging

from stride_track.core.tracker import ActivityTracker
from stride_track.services.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


async def run_hourly_ticker(
    tracker: ActivityTracker,
    manager: ConnectionManager | None = None,
    interval_seconds: float = 3600.0,
) -> None:
    """Commit an hourly bucket every *interval_seconds* while tracking."""
    if interval_seconds <= 0:
        raise ValueError("interval_seconds must be positive")

    logger.info("Hourly ticker running every %.0fs", interval_seconds)
    try:
        while True:
            await asyncio.sleep(interval_seconds)
            if not tracker.is_tracking:
                continue
            hour = tracker.on_hour_tick()
            logger.debug("Ticker committed hour %02d", hour)
            if manager is not None:
                await manager.broadcast_state(tracker.snapshot())
    except asyncio.CancelledError:
        logger.info("Hourly ticker stopped")
        raise
