"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Set up basic logger for config module
logger = logging.getLogger(__name__)


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class StoreBackend(str, Enum):
    DATABASE = "database"
    MEMORY = "memory"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "URL Shortener"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Maps long URLs to 8-character hash ids and redirects back"
    DEBUG: bool = False

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Short link construction
    BASE_URL: Optional[str] = None  # None means derive scheme/host from the request
    REDIRECT_PREFIX: str = "r"

    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # Storage
    STORE_BACKEND: StoreBackend = StoreBackend.DATABASE
    DATABASE_URL: Optional[str] = None
    STORE_TIMEOUT_SECONDS: float = 5.0  # Upper bound for a single storage round-trip

    # Database pool settings
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False
    SQLITE_BUSY_TIMEOUT: float = 30.0  # Seconds a SQLite connection waits on a locked database

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"
    LOG_JSON: bool = True
    LOG_TO_FILE: bool = False
    REQUEST_LOGGING_ENABLED: bool = True

    # Validators
    @field_validator("BASE_URL", "DATABASE_URL", mode="before")
    def empty_string_to_none(cls, v):
        """Treat an empty environment variable as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("DATABASE_URL")
    def normalize_database_url(cls, v: Optional[str]) -> Optional[str]:
        """Point plain PostgreSQL URLs at the asyncpg driver."""
        if v is None:
            return v
        for scheme in ("postgres://", "postgresql://"):
            if v.startswith(scheme):
                return "postgresql+asyncpg://" + v[len(scheme):]
        return v

    @field_validator("BASE_URL")
    def strip_base_url(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v

    @field_validator("REDIRECT_PREFIX")
    def normalize_prefix(cls, v: str) -> str:
        prefix = v.strip("/")
        if not prefix:
            raise ValueError("REDIRECT_PREFIX must not be empty")
        return prefix

    @field_validator("CORS_ORIGINS")
    def validate_list_or_string(cls, v: Union[List[str], str]) -> List[str]:
        """Convert comma-separated string to list if needed."""
        if isinstance(v, str):
            if not v.strip():
                return []
            if v == "*":
                return ["*"]
            return [item.strip() for item in v.split(",")]
        return v


@dataclass
class StartupCheck:
    """Outcome of validating settings before the server starts."""
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_startup(config: Settings) -> StartupCheck:
    """Collect configuration problems that must stop the process from serving.

    The caller decides what to do with the result; nothing here exits.
    """
    check = StartupCheck()
    if config.STORE_BACKEND == StoreBackend.DATABASE and not config.DATABASE_URL:
        check.errors.append("DATABASE_URL environment variable is not set")
    if not 0 < config.PORT < 65536:
        check.errors.append(f"PORT must be between 1 and 65535, got {config.PORT}")
    if config.STORE_TIMEOUT_SECONDS <= 0:
        check.errors.append("STORE_TIMEOUT_SECONDS must be positive")
    if config.STORE_BACKEND == StoreBackend.MEMORY and config.ENVIRONMENT == EnvironmentType.PRODUCTION:
        logger.warning("Using the in-memory store in production; mappings are lost on restart")
    return check


# Create a singleton instance of the settings
settings = Settings()
