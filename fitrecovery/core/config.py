"""
Engine configuration using Pydantic Settings.

Loads configuration from environment variables (``FITRECOVERY_`` prefix,
optionally from a ``.env`` file).  None of these values are required:
the engine is a pure computation and runs with the defaults below.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "fitrecovery - muscle recovery & readiness engine"
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["fitrecovery contributors"]

    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    # Recovery defaults applied when the user has not configured anything
    DEFAULT_BASE_REST_INTERVAL_HOURS: float = 48.0
    DEFAULT_EXPERIENCE_LEVEL: str = "intermediate"

    # Volume units that make up one workload point
    WORKLOAD_VOLUME_SCALE: float = 100.0

    model_config = SettingsConfigDict(
        env_prefix="FITRECOVERY_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
