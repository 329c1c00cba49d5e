"""Session-level activity state with lock-guarded access.

Design notes:
    - A single threading.Lock guards step count, total distance, the distance
      reference point and the hourly histogram as one unit.  Accelerometer,
      GPS and timer callbacks may arrive on different threads.
    - snapshot() copies every field under that same lock, so readers never
      see a step reflected in the count but not in a just-committed bucket.
    - commit_hourly_bucket() reads whatever step count is current when it
      runs.  It is a snapshot operation and is not ordered against steps
      that arrive afterwards.
    - In CUMULATIVE mode (the default) a bucket stores the session's running
      total at commit time, so the histogram reads as a staircase rather
      than per-hour activity.  PER_HOUR mode stores the difference from the
      previous commit instead.
    - Caller bugs (negative delta, hour out of range) raise
      ContractViolation.  Nothing is clamped.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from uuid import UUID

from stride_track.core.distance import DistanceAccumulator
from stride_track.domain.enums import HistogramMode
from stride_track.domain.errors import ContractViolation
from stride_track.domain.sample import GeoPosition
from stride_track.domain.state import HOURS_PER_DAY, ActivityState
from stride_track.foundation.clock import utc_now
from stride_track.foundation.identifiers import new_id

logger = logging.getLogger(__name__)


class ActivityAggregator:
    """Thread-safe owner of a tracking session's running totals.

    Args:
        accumulator: Distance accumulator whose reference point becomes the
            session's last_position.  A fresh one is created if omitted.
        histogram_mode: What a committed hourly bucket stores.
    """

    def __init__(
        self,
        accumulator: DistanceAccumulator | None = None,
        histogram_mode: HistogramMode = HistogramMode.CUMULATIVE,
    ) -> None:
        self._accumulator = accumulator or DistanceAccumulator()
        self._histogram_mode = HistogramMode(histogram_mode)
        self._lock = threading.Lock()
        self._init_state()

    @property
    def histogram_mode(self) -> HistogramMode:
        return self._histogram_mode

    # ── Public API ───────────────────────────────────────────────────────

    def record_step(self) -> None:
        """Add one step to the session total."""
        with self._lock:
            self._step_count += 1

    def record_distance(self, delta: float) -> None:
        """Add *delta* metres to the session total.

        Raises:
            ContractViolation: If *delta* is negative.
        """
        if delta < 0:
            raise ContractViolation("delta", delta, "distance delta must be >= 0")
        with self._lock:
            self._total_distance += delta

    def record_position(self, position: GeoPosition) -> float:
        """Feed a fix through the owned accumulator and add the resulting delta.

        The reference point and the distance total change together under the
        lock.  Returns the delta (0.0 for the first fix of a session).
        """
        with self._lock:
            delta = self._accumulator.update(position)
            self._total_distance += delta
            return delta

    def commit_hourly_bucket(self, hour: int) -> int:
        """Write the current step value into the slot for *hour*.

        Returns the value written.

        Raises:
            ContractViolation: If *hour* is not an int in 0-23.
        """
        if isinstance(hour, bool) or not isinstance(hour, int):
            raise ContractViolation("hour", hour, "hour must be an integer")
        if not 0 <= hour < HOURS_PER_DAY:
            raise ContractViolation("hour", hour, f"hour must be in [0, {HOURS_PER_DAY - 1}]")

        with self._lock:
            if self._histogram_mode == HistogramMode.PER_HOUR:
                value = self._step_count - self._committed_total
            else:
                value = self._step_count
            self._hourly_history[hour] = value
            self._committed_total = self._step_count
        logger.info("Committed hour %02d = %d steps (%s)", hour, value, self._histogram_mode.value)
        return value

    def reset(self) -> UUID:
        """Start a new session: zero all totals, forget the reference fix.

        Returns the new session id.
        """
        with self._lock:
            self._accumulator.reset()
            self._init_state()
            session_id = self._session_id
        logger.info("Activity session %s started", session_id)
        return session_id

    def snapshot(self) -> ActivityState:
        """Consistent read-only copy of the whole session state."""
        with self._lock:
            session_id = self._session_id
            started_at = self._started_at
            step_count = self._step_count
            total_distance = self._total_distance
            last_position = self._accumulator.reference
            hourly_history = tuple(self._hourly_history)
        return ActivityState(
            session_id=session_id,
            started_at=started_at,
            step_count=step_count,
            total_distance=total_distance,
            last_position=last_position,
            hourly_history=hourly_history,
        )

    # ── Internals ────────────────────────────────────────────────────────

    def _init_state(self) -> None:
        """Must be called while holding self._lock (or from __init__)."""
        self._session_id: UUID = new_id()
        self._started_at: datetime = utc_now()
        self._step_count: int = 0
        self._total_distance: float = 0.0
        self._hourly_history: list[int] = [0] * HOURS_PER_DAY
        self._committed_total: int = 0

    def __repr__(self) -> str:
        return (
            f"ActivityAggregator(session={self._session_id!s}, "
            f"steps={self._step_count}, "
            f"distance={self._total_distance:.2f}m)"
        )
