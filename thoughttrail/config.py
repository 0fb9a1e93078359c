"""
Configuration and settings for the blogging API.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Development-only signing secret; real deployments set SECRET_ACCESS_KEY.
DEFAULT_SECRET_ACCESS_KEY = "thoughttrail-dev-secret"


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="")
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Database (any SQLAlchemy URL; in-memory SQLite when unset)
    database_url: Optional[str] = Field(default=None)

    # Access tokens
    secret_access_key: str = Field(default=DEFAULT_SECRET_ACCESS_KEY)
    access_token_expire_minutes: int = Field(default=60 * 24 * 7)

    # S3-compatible storage for banner and profile images
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)
    aws_region: Optional[str] = Field(default=None)
    aws_bucket: Optional[str] = Field(default=None)
    aws_endpoint: Optional[str] = Field(default=None)

    # Firebase service account used to verify Google sign-in tokens
    firebase_credentials: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
