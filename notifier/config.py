"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifier.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to store and compare notification timestamps",
    )
    emit_max_workers: int = Field(
        default=8,
        description="Upper bound of worker threads used to fan an event out to recipients",
        gt=0,
    )
    recipient_timeout_seconds: float = Field(
        default=5.0,
        description="Seconds to wait for a single recipient delivery before giving up on it",
        gt=0,
    )
    role_lookup_timeout_seconds: float = Field(
        default=5.0,
        description="Seconds to wait for a role directory lookup (sender role or role members)",
        gt=0,
    )
    role_lookup_max_workers: int = Field(
        default=4,
        description="Worker threads reserved for role directory lookups",
        gt=0,
    )
    config_cache_ttl_seconds: float = Field(
        default=30.0,
        description="Lifetime of cached event types, routing rules, policies and preferences",
        ge=0,
    )
    default_sender_role: str = Field(
        default="client",
        description="Role assumed for senders that have no role assigned",
        min_length=1,
    )
    sqlite_busy_timeout_seconds: float = Field(
        default=30.0,
        description="How long SQLite connections wait on a locked database",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the HTTP API from a browser",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
