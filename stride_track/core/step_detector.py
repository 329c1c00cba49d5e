"""Fixed-threshold step detection over acceleration magnitude.

A sample counts as a step when the magnitude of its acceleration vector is
strictly greater than the threshold.  There is no history window and no
gravity removal: every sample above threshold is a step, even two samples a
few milliseconds apart.

NaN components give a NaN magnitude, which compares False, so they never
count.  An infinite component gives an infinite magnitude, which always
counts.  Neither case is special-cased.

An optional minimum step interval suppresses steps that follow an accepted
step too closely.  It is off by default, and turning it on makes the
detector stateful.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from stride_track.domain.sample import AccelerationSample
from stride_track.foundation.clock import utc_now

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 1.1


class StepDetector:
    """Classifies individual acceleration samples as step / no step.

    Args:
        threshold: Magnitude a sample must exceed to count as a step, in the
            same units as the samples.
        min_step_interval: Optional refractory period.  When set, a step is
            only accepted if at least this much time has passed since the
            previously accepted step.
    """

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        min_step_interval: timedelta | None = None,
    ) -> None:
        if min_step_interval is not None and min_step_interval < timedelta(0):
            raise ValueError("min_step_interval must not be negative")
        self._threshold = threshold
        self._min_step_interval = min_step_interval
        self._last_step_at: datetime | None = None

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def min_step_interval(self) -> timedelta | None:
        return self._min_step_interval

    def detect(self, sample: AccelerationSample) -> bool:
        """Return True if *sample* represents one step."""
        if not sample.magnitude > self._threshold:
            return False

        if self._min_step_interval is None:
            return True

        at = sample.timestamp or utc_now()
        if self._last_step_at is not None and at - self._last_step_at < self._min_step_interval:
            logger.debug("Step at %s suppressed (interval %s)", at, self._min_step_interval)
            return False
        self._last_step_at = at
        return True

    def reset(self) -> None:
        """Forget the last accepted step time (refractory mode only)."""
        self._last_step_at = None

    def __repr__(self) -> str:
        return (
            f"StepDetector(threshold={self._threshold}, "
            f"min_step_interval={self._min_step_interval})"
        )
