"""
Configuration management for dynamic_sql.

This module provides environment-based configuration using Pydantic
BaseSettings. Values are read from environment variables and, when present,
from a ``.env`` file at the project root (override the location with
``DSQL_ENV_FILE``).
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("DSQL_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Fields without a validation alias are read with the DSQL_ prefix; for
    example DSQL_DIALECT overrides the ``dialect`` setting.

    Unprefixed fields:
    - DATABASE_URL: Connection string used by create_engine_from_settings
    - LOG_LEVEL: Logging level (uppercase)
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )
    DATABASE_URL: str = Field(
        default="sqlite:///:memory:",
        validation_alias="DATABASE_URL",
        description="SQLAlchemy database URL",
    )

    dialect: Literal["generic", "postgresql", "mysql"] = Field(
        default="generic",
        description="Default dialect used when a statement is rendered without one",
    )
    log_statements: bool = Field(
        default=False,
        description="Log every rendered statement at debug level",
    )
    sql_echo: bool = Field(
        default=False,
        description="Pass echo=True to the SQLAlchemy engine",
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def _normalize_database_url(cls, value: str) -> str:
        # SQLAlchemy no longer accepts the postgres:// scheme
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql://", 1)
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    model_config = SettingsConfigDict(
        env_prefix="DSQL_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
