# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# FileNest reads its configuration once, from the process environment and an
# optional .env file, through pydantic-settings.
#
# Usage:
#   from app.config import settings
#   settings.storage_root  # Path
#
# A missing or short JWT_SECRET stops the process at import time; nothing
# else is required.
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    FileNest configuration.

    Variable names match the attribute names exactly. Values left empty
    in the environment fall back to the defaults below.
    """

    # -------------------------------------------------------------------------
    # Token Signing
    # -------------------------------------------------------------------------

    JWT_SECRET: str = Field(
        ...,
        min_length=16,
        description="Secret used to sign session tokens (HS256)"
    )

    JWT_EXPIRES_HOURS: int = Field(
        default=24,
        ge=1,
        le=8760,
        description="Token lifetime in hours"
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    STORAGE_PATH: str = Field(
        default="./storage",
        description="Directory where user files are stored (one subdirectory per user)"
    )

    DATABASE_PATH: str = Field(
        default="filenest.db",
        description="SQLite database file holding registered users"
    )

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment; production restricts CORS"
    )

    DEBUG: bool = Field(
        default=False,
        description="Log at DEBUG level"
    )

    API_HOST: str = Field(default="0.0.0.0", description="Bind address")

    API_PORT: int = Field(default=8000, ge=1, le=65535, description="Bind port")

    # Comma-separated; only honored in production
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Origins allowed to call the API from a browser"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Derived Values
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS_ORIGINS split on commas, blanks dropped."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def jwt_secret_bytes(self) -> bytes:
        """The signing secret as bytes, as expected by the token service."""
        return self.JWT_SECRET.encode("utf-8")

    @property
    def storage_root(self) -> Path:
        return Path(self.STORAGE_PATH)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Build the Settings once per process.

    Returns:
        Settings: Validated configuration
    """
    return Settings()


settings = get_settings()
