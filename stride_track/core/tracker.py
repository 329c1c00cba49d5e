"""ActivityTracker — wires step detection and distance into one session.

The tracker is what a host application talks to.  It holds the tracking
flag, forwards samples through the StepDetector into the aggregator, routes
fixes through the aggregator's distance accumulator, and commits hourly
buckets on clock ticks.

It never subscribes to sensors or schedules timers itself.  The host calls
on_acceleration / on_position / on_hour_tick as events arrive, and stops
calling them when tracking stops.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from uuid import UUID

from stride_track.core.step_detector import StepDetector
from stride_track.domain.enums import TrackingStatus
from stride_track.domain.sample import AccelerationSample, GeoPosition
from stride_track.domain.state import ActivityState
from stride_track.foundation.clock import current_hour
from stride_track.store.activity_aggregator import ActivityAggregator

logger = logging.getLogger(__name__)


class TrackerStats:
    """Per-session event counters for observability."""

    __slots__ = (
        "samples_received",
        "steps_detected",
        "fixes_received",
        "hour_ticks",
        "ignored_events",
    )

    def __init__(self) -> None:
        self.samples_received: int = 0
        self.steps_detected: int = 0
        self.fixes_received: int = 0
        self.hour_ticks: int = 0
        self.ignored_events: int = 0

    def to_dict(self) -> dict:
        return {
            "samples_received": self.samples_received,
            "steps_detected": self.steps_detected,
            "fixes_received": self.fixes_received,
            "hour_ticks": self.hour_ticks,
            "ignored_events": self.ignored_events,
        }


class ActivityTracker:
    """Session facade over StepDetector + ActivityAggregator.

    Usage:
        tracker = ActivityTracker()
        tracker.start()

        tracker.on_acceleration(AccelerationSample(x=0.9, y=0.4, z=0.6))
        tracker.on_position(GeoPosition(latitude=52.37, longitude=4.89))
        tracker.on_hour_tick()

        state = tracker.snapshot()
    """

    def __init__(
        self,
        detector: StepDetector | None = None,
        aggregator: ActivityAggregator | None = None,
    ) -> None:
        self._detector = detector or StepDetector()
        self._aggregator = aggregator or ActivityAggregator()
        self._status = TrackingStatus.IDLE
        self._stats = TrackerStats()
        self._stats_lock = threading.Lock()

    # ── Lifecycle ────────────────────────────────────────────────────────

    @property
    def status(self) -> TrackingStatus:
        return self._status

    @property
    def is_tracking(self) -> bool:
        return self._status == TrackingStatus.TRACKING

    def start(self) -> UUID:
        """Begin a fresh session.  Any previous totals are discarded."""
        self._detector.reset()
        session_id = self._aggregator.reset()
        with self._stats_lock:
            self._stats = TrackerStats()
        self._status = TrackingStatus.TRACKING
        logger.info("Tracking started (session %s)", session_id)
        return session_id

    def stop(self) -> ActivityState:
        """Stop accepting events.  Totals stay readable until the next start."""
        self._status = TrackingStatus.IDLE
        state = self._aggregator.snapshot()
        logger.info(
            "Tracking stopped (session %s): %d steps, %.2f m",
            state.session_id,
            state.step_count,
            state.total_distance,
        )
        return state

    # ── Events ───────────────────────────────────────────────────────────

    def on_acceleration(self, sample: AccelerationSample) -> bool:
        """Handle one accelerometer reading.  Returns True if a step was counted."""
        if not self._accepting("acceleration"):
            return False
        is_step = self._detector.detect(sample)
        if is_step:
            self._aggregator.record_step()
        with self._stats_lock:
            self._stats.samples_received += 1
            if is_step:
                self._stats.steps_detected += 1
        return is_step

    def on_position(self, position: GeoPosition) -> float:
        """Handle one location fix.  Returns the distance delta in metres."""
        if not self._accepting("position"):
            return 0.0
        delta = self._aggregator.record_position(position)
        with self._stats_lock:
            self._stats.fixes_received += 1
        return delta

    def on_hour_tick(self, now: datetime | None = None) -> int:
        """Commit the bucket for the local hour of *now* (default: the current time).

        Returns the hour that was committed.  Ticks are honoured while idle
        too, so a host timer that fires just after stop() still records the
        final totals.
        """
        hour = current_hour(now)
        self.commit_hour(hour)
        return hour

    def commit_hour(self, hour: int) -> int:
        """Commit the bucket for an explicit *hour*.  Returns the value written.

        Raises:
            ContractViolation: If *hour* is not an int in 0-23.
        """
        value = self._aggregator.commit_hourly_bucket(hour)
        with self._stats_lock:
            self._stats.hour_ticks += 1
        return value

    # ── Queries ──────────────────────────────────────────────────────────

    def snapshot(self) -> ActivityState:
        return self._aggregator.snapshot()

    @property
    def stats(self) -> dict:
        with self._stats_lock:
            return self._stats.to_dict()

    @property
    def detector(self) -> StepDetector:
        return self._detector

    @property
    def aggregator(self) -> ActivityAggregator:
        return self._aggregator

    # ── Internals ────────────────────────────────────────────────────────

    def _accepting(self, kind: str) -> bool:
        if self.is_tracking:
            return True
        logger.debug("Ignoring %s event while idle", kind)
        with self._stats_lock:
            self._stats.ignored_events += 1
        return False
