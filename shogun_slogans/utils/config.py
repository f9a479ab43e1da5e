"""Application configuration."""
from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from .env and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="SHOGUN_")

    cache_backend: str = "memory"  # "memory" | "database"
    database_url: str = Field(
        default="sqlite+pysqlite:///shogun_slogans.db",
        validation_alias=AliasChoices("SHOGUN_DATABASE_URL", "DATABASE_URL"),
    )
    cache_ttl: int = 3600
    default_speed: int = 100
    default_cursor: str = "|"
    default_loop: bool = False
    enable_accessibility: bool = True
    enable_performance_optimization: bool = True
    debug_mode: bool = False
    editor_token: str = ""
    admin_token: str = ""
    log_level: str = "INFO"


settings = Settings()
