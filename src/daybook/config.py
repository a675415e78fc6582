"""Configuration management for Daybook."""

from datetime import time
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from daybook.constants import DEFAULT_SERIES_END_TIME, DEFAULT_SERIES_START_TIME


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DAYBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    environment: str = Field(default="production", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    # Recurring series
    default_series_start_time: time = Field(
        default=DEFAULT_SERIES_START_TIME,
        description="Start time for series whose template has none",
    )
    default_series_end_time: time = Field(
        default=DEFAULT_SERIES_END_TIME,
        description="End time for series whose template has none",
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
