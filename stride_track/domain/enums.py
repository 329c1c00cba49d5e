"""Controlled enumerations for the stride-track domain."""

from __future__ import annotations

from enum import Enum


class HistogramMode(str, Enum):
    """What an hourly bucket stores when it is committed.

    CUMULATIVE keeps the session's running step total at commit time.
    PER_HOUR keeps only the steps added since the previous commit.
    """

    CUMULATIVE = "cumulative"
    PER_HOUR = "per_hour"


class TrackingStatus(str, Enum):
    """Whether the tracker is currently accepting sensor events."""

    IDLE = "idle"
    TRACKING = "tracking"
