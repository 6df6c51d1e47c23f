"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./campus_notify.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key shared with the auth service to verify bearer tokens",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before locally minted access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="Asia/Kolkata",
        description="Timezone used to compute 'now' and to store naive datetimes",
    )
    notification_retention_days: int = Field(
        default=30,
        description="Days an expired notification is kept before the cleanup sweep removes it",
        ge=0,
    )
    welcome_notification_ttl_days: int = Field(default=30, gt=0)
    timetable_notification_ttl_days: int = Field(default=7, gt=0)
    opportunity_urgency_window_days: int = Field(
        default=7,
        description="Opportunities whose deadline falls inside this window are sent as high priority",
        gt=0,
    )
    outbox_max_attempts: int = Field(
        default=5,
        description="Attempts before a failing outbox event is parked as failed",
        gt=0,
    )
    cors_origins: list[str] = Field(default_factory=list)
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def _validate_log_level(self) -> "Settings":
        normalized = self.log_level.upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        self.log_level = normalized
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
