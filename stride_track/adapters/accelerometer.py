"""AccelerometerAdapter — translates raw accelerometer readings.

Expected raw format (react-native-sensors style):
{
    "x": 0.12,
    "y": -0.98,
    "z": 0.31,
    "timestamp": 1792396800000        # optional, epoch ms or ISO-8601
}
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from stride_track.adapters.base import SensorAdapter, _epoch_or_iso
from stride_track.domain.sample import AccelerationSample

_AXES = ("x", "y", "z")


class AccelerometerAdapter(SensorAdapter):
    """Maps {x, y, z} payloads to AccelerationSample."""

    @property
    def source_name(self) -> str:
        return "accelerometer"

    def can_handle(self, raw: dict[str, Any]) -> bool:
        return all(axis in raw for axis in _AXES)

    def adapt(self, raw: dict[str, Any]) -> AccelerationSample:
        for axis in _AXES:
            if raw.get(axis) is None:
                raise ValueError(f"accelerometer payload missing '{axis}'")

        timestamp = raw.get("timestamp")
        try:
            return AccelerationSample.model_validate({
                "x": raw["x"],
                "y": raw["y"],
                "z": raw["z"],
                "timestamp": _epoch_or_iso(timestamp) if timestamp is not None else None,
            })
        except ValidationError as exc:
            raise ValueError(f"accelerometer payload invalid: {exc.error_count()} error(s)") from exc
