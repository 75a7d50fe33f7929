"""
Application configuration using pydantic-settings.

Tunes the dispatcher pool and the recompression pass via environment variables.
Use nested delimiter __ for nested settings, e.g., DISPATCH__CONCURRENCY=4
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DispatchSettings(BaseSettings):
    """Resize-or-copy worker pool configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DISPATCH__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    concurrency: int = Field(default=8, gt=0)     # Max files in flight
    resize_threshold_bytes: int = Field(default=150_000, ge=0)  # Larger files get resized


class RecompressSettings(BaseSettings):
    """Lossy JPEG recompression configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RECOMPRESS__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    pattern: str = "*.jpg"
    quality: int = Field(default=75, ge=1, le=95)
    progressive: bool = True


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App Settings
    log_level: str = "INFO"
    json_logs: bool = False  # Set to True for JSON output in production
    log_file: Optional[str] = None

    # Nested settings
    dispatch: DispatchSettings = Field(default_factory=DispatchSettings)
    recompress: RecompressSettings = Field(default_factory=RecompressSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
