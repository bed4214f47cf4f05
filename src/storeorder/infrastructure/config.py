"""Configuration management using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables (``STOREORDER_*``)."""

    # Hosted backend
    backend_url: str = Field(default="http://localhost:54321", description="Backend base URL")
    backend_api_key: str = Field(default="", description="Public (anon) API key")
    access_token: Optional[str] = Field(default=None, description="User session token")
    request_timeout: float = Field(default=10.0, description="Request timeout in seconds")

    # Local state
    data_dir: Path = Field(default=Path("data"), description="Directory for persisted blobs")
    cache_freshness_seconds: float = Field(
        default=300.0, description="How long a refreshed product list counts as fresh"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_file: Optional[str] = Field(default=None, description="Optional rotating log file")
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_max_bytes: int = 10485760  # 10MB
    log_backup_count: int = 5

    model_config = SettingsConfigDict(
        env_prefix="STOREORDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
