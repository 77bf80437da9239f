"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    default_daily_goal: float = 2000
    timezone: str | None = None
    search_score_cutoff: float = 60.0
    streak_max_days: int = 365
    retry_delay_seconds: float = 2.0
    seed_foods_path: str | None = None
    log_level: str = "INFO"
    log_file: str | None = "~/.caltrack/caltrack.log"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
