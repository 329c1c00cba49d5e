"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "stride-track"
    debug: bool = False
    log_level: str = "INFO"

    # Step detection
    step_threshold: float = 1.1
    min_step_interval_ms: int | None = None

    # Distance
    earth_radius_m: float = 6_371_000.0

    # Hourly histogram: "cumulative" or "per_hour"
    histogram_mode: str = "cumulative"
    hourly_tick_enabled: bool = False
    hourly_tick_seconds: float = 3600.0

    # Sensor hints handed to the host app
    accelerometer_interval_ms: int = 400
    distance_filter_m: float = 1.0

    model_config = {"env_prefix": "STRIDE_"}


settings = Settings()
