"""
PURPOSE: Configuration settings for the Cosmocore signal ingestion service.

This module uses Pydantic Settings to manage configuration from environment
variables and .env files. All settings are validated and typed.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    PURPOSE: Central configuration class for Cosmocore.

    Holds the database connection string and pool sizing, logging and
    listener settings. DATABASE_URL has no default: a process started
    without it fails while loading settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database Configuration
    DATABASE_URL: str
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 0
    DB_ECHO: bool = False

    # System Settings
    LOG_LEVEL: str = "DEBUG"

    # HTTP Listener
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @field_validator("DATABASE_URL")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Rewrite plain PostgreSQL URLs to the asyncpg driver form."""
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and not empty")
        v = v.strip()
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v: int) -> int:
        """Validate the pool holds at least one connection."""
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    PURPOSE: Return the process-wide settings loaded from the environment.

    Loaded lazily so that importing the package never requires DATABASE_URL;
    the first call raises pydantic.ValidationError when it is missing.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()
