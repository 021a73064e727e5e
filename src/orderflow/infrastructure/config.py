"""Runtime configuration.

Loaded from ``ORDERFLOW_*`` environment variables (and an optional
``.env`` file).  Build a fresh ``Settings()`` where it is needed rather
than caching one at import time, so the environment can be overridden.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ORDERFLOW_",
        env_file=".env",
        extra="ignore",
    )

    # Storage
    data_dir: Path = Field(Path("data"), description="Directory holding the JSON stores")

    # Logging
    log_level: str = Field("INFO", description="Minimum level that gets logged")
    log_json: bool = Field(False, description="Render log lines as JSON")

    # Order progression
    scheduler_enabled: bool = Field(True, description="Run the progression scheduler")
    pending_scan_interval_seconds: float = Field(30.0, gt=0)
    confirmed_scan_interval_seconds: float = Field(60.0, gt=0)
    pending_min_dwell_seconds: float = Field(5.0, ge=0)
    confirmed_min_dwell_seconds: float = Field(10.0, ge=0)

    # Notifications
    notification_latency_seconds: float = Field(
        0.1, ge=0, description="Simulated delivery time of one notification"
    )
