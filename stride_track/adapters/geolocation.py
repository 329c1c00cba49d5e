"""Position adapters — translate raw location fixes.

GeolocationAdapter expects the browser / community-geolocation shape:
{
    "coords": {"latitude": 52.3702, "longitude": 4.8952, "accuracy": 5.0},
    "timestamp": 1792396800000
}

FixAdapter expects a flat fix:
{
    "latitude": 52.3702,
    "longitude": 4.8952,
    "timestamp": "2026-10-19T08:00:00Z"     # optional
}

Coordinates are not range-checked here either.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from stride_track.adapters.base import SensorAdapter, _epoch_or_iso
from stride_track.domain.sample import GeoPosition


def _build_position(source: str, fields: dict[str, Any], timestamp: Any) -> GeoPosition:
    for key in ("latitude", "longitude"):
        if fields.get(key) is None:
            raise ValueError(f"{source} payload missing '{key}'")
    try:
        return GeoPosition.model_validate({
            "latitude": fields["latitude"],
            "longitude": fields["longitude"],
            "timestamp": _epoch_or_iso(timestamp) if timestamp is not None else None,
        })
    except ValidationError as exc:
        raise ValueError(f"{source} payload invalid: {exc.error_count()} error(s)") from exc


class GeolocationAdapter(SensorAdapter):
    """Maps {coords: {latitude, longitude}} payloads to GeoPosition."""

    @property
    def source_name(self) -> str:
        return "geolocation"

    def can_handle(self, raw: dict[str, Any]) -> bool:
        return isinstance(raw.get("coords"), dict)

    def adapt(self, raw: dict[str, Any]) -> GeoPosition:
        return _build_position(self.source_name, raw["coords"], raw.get("timestamp"))


class FixAdapter(SensorAdapter):
    """Maps flat {latitude, longitude} payloads to GeoPosition."""

    @property
    def source_name(self) -> str:
        return "fix"

    def can_handle(self, raw: dict[str, Any]) -> bool:
        return "latitude" in raw and "longitude" in raw

    def adapt(self, raw: dict[str, Any]) -> GeoPosition:
        return _build_position(self.source_name, raw, raw.get("timestamp"))
