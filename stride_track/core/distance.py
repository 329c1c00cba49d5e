"""Great-circle distance accumulation over a stream of position fixes.

Uses the haversine formula on a spherical Earth.  Each update yields the
distance from the previous fix to the new one; the first fix only sets the
reference point.

There is no jitter filtering, no outlier rejection, and no range checking on
coordinates.  A GPS glitch that jumps a few kilometres produces a delta of a
few kilometres.
"""

from __future__ import annotations

import logging
import math

from stride_track.domain.sample import GeoPosition

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    radius: float = EARTH_RADIUS_M,
) -> float:
    """Distance in metres between two points given in decimal degrees.

    Non-finite coordinates yield NaN rather than raising.
    """
    if not all(math.isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        return math.nan

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) * math.sin(delta_phi / 2)
        + math.cos(phi1) * math.cos(phi2)
        * math.sin(delta_lambda / 2) * math.sin(delta_lambda / 2)
    )
    # Rounding can push a a hair outside [0, 1] near antipodes; NaN passes through
    if a < 0.0:
        a = 0.0
    elif a > 1.0:
        a = 1.0
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius * c


class DistanceAccumulator:
    """Turns consecutive fixes into incremental distances.

    Not thread-safe on its own.  ActivityAggregator calls it under its lock;
    standalone callers must feed fixes from a single stream in arrival order.
    """

    def __init__(self, radius: float = EARTH_RADIUS_M) -> None:
        self._radius = radius
        self._reference: GeoPosition | None = None

    @property
    def reference(self) -> GeoPosition | None:
        """The fix the next delta will be measured from, or None."""
        return self._reference

    def update(self, position: GeoPosition) -> float:
        """Return metres moved since the previous fix, then make *position* the reference."""
        previous = self._reference
        if previous is None:
            self._reference = position
            logger.debug("First fix %s stored as reference", position)
            return 0.0

        delta = haversine_distance(
            previous.latitude,
            previous.longitude,
            position.latitude,
            position.longitude,
            self._radius,
        )
        self._reference = position
        # Non-negative by construction: atan2 of two non-negative roots
        assert not delta < 0.0, f"negative haversine delta {delta}"
        logger.debug("Fix %s -> %s: %.3f m", previous, position, delta)
        return delta

    def reset(self) -> None:
        """Drop the reference so the next update behaves as the first fix."""
        self._reference = None
