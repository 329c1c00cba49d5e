"""Canonical sensor models — what the host hands to the engine.

An AccelerationSample is one accelerometer reading; a GeoPosition is one
location fix.  Both are ephemeral: the engine consumes them immediately and
keeps at most the latest GeoPosition as a reference point.

Values are deliberately NOT range-checked.  Out-of-range coordinates and
NaN/Infinity components pass through and follow ordinary floating-point
rules downstream.  Bounds checking belongs to the host's acquisition layer.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _attach_utc(v: datetime | None) -> datetime | None:
    # Sensor stacks frequently emit naive timestamps; treat them as UTC
    if v is not None and v.tzinfo is None:
        v = v.replace(tzinfo=timezone.utc)
    return v


# ── Acceleration ─────────────────────────────────────────────────────────────

class AccelerationSample(BaseModel):
    """A single tri-axial accelerometer reading.

    Components may be negative and may include gravity; units must match
    the step detector's threshold.
    """

    x: float
    y: float
    z: float
    timestamp: Optional[datetime] = Field(
        default=None,
        description="When the reading was taken (UTC-aware), if the sensor reports it",
    )

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def timestamp_must_be_aware(cls, v: datetime | None) -> datetime | None:
        return _attach_utc(v)

    @property
    def magnitude(self) -> float:
        """Euclidean norm of the acceleration vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


# ── Position ─────────────────────────────────────────────────────────────────

class GeoPosition(BaseModel):
    """A latitude/longitude fix in decimal degrees."""

    latitude: float
    longitude: float
    timestamp: Optional[datetime] = Field(
        default=None,
        description="When the fix was acquired (UTC-aware), if known",
    )

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def timestamp_must_be_aware(cls, v: datetime | None) -> datetime | None:
        return _attach_utc(v)

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"
