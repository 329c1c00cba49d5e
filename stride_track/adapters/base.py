"""Abstract base for sensor payload adapters.

Sensor adapters normalise raw payloads from the host's sensor stacks into
the canonical AccelerationSample / GeoPosition models.

Architectural rules:
    1. Adapters must NOT mutate the incoming payload dict.
    2. adapt() must return a fully valid model or raise ValueError.
    3. No adapter may call the tracker or aggregator directly.
    4. No detection or distance logic lives inside an adapter, only field mapping.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Union

from stride_track.domain.sample import AccelerationSample, GeoPosition

SensorEvent = Union[AccelerationSample, GeoPosition]


class SensorAdapter(ABC):
    """Base class for converting raw host payloads into sensor events."""

    @abstractmethod
    def can_handle(self, raw: dict[str, Any]) -> bool:
        """Return True if this adapter knows how to translate *raw*.

        Must be a fast, non-destructive check (e.g. key presence).
        """
        ...

    @abstractmethod
    def adapt(self, raw: dict[str, Any]) -> SensorEvent:
        """Translate a raw payload dict into a validated sensor event.

        Raises:
            ValueError: If the payload cannot be normalised.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Human-readable name of the sensor stack this adapter handles."""
        ...


def _epoch_or_iso(value: Any) -> Any:
    """Pass ISO strings through; convert epoch milliseconds to seconds."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value / 1000.0
    return value
