"""ActivityState — an immutable point-in-time view of a tracking session.

Produced by ActivityAggregator.snapshot().  The aggregator copies every field
under its lock, so a state never mixes values from before and after an
update.  Holding on to a snapshot never blocks the aggregator.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from stride_track.domain.sample import GeoPosition

HOURS_PER_DAY = 24


class ActivityState(BaseModel):
    """Session totals plus the 24-slot hourly step histogram."""

    session_id: UUID
    started_at: datetime
    step_count: int = Field(..., ge=0, description="Steps detected this session")
    total_distance: float = Field(..., description="Metres travelled this session")
    last_position: Optional[GeoPosition] = Field(
        default=None,
        description="Reference fix for the next distance delta; None until the first fix",
    )
    hourly_history: tuple[int, ...] = Field(
        ...,
        description="Step value committed for each local hour 0-23",
    )

    model_config = {"frozen": True}

    @field_validator("hourly_history")
    @classmethod
    def history_has_24_slots(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if len(v) != HOURS_PER_DAY:
            raise ValueError(f"hourly_history must have {HOURS_PER_DAY} entries, got {len(v)}")
        return v

    def summary(self) -> dict:
        """JSON-ready view for display: distance to two decimals, hour labels."""
        return {
            "session_id": str(self.session_id),
            "started_at": self.started_at.isoformat(),
            "step_count": self.step_count,
            "distance_m": round(self.total_distance, 2),
            "last_position": (
                {
                    "latitude": self.last_position.latitude,
                    "longitude": self.last_position.longitude,
                }
                if self.last_position
                else None
            ),
            "hourly_labels": [str(h) for h in range(HOURS_PER_DAY)],
            "hourly_history": list(self.hourly_history),
        }
