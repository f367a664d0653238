"""
Configuration management for entity-sql.

This module provides environment-based configuration using Pydantic BaseSettings,
so the parser dialect and logging behaviour can be adjusted per deployment
without code changes.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("ENTITY_SQL_ENV_FILE")
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

    Environment variables are automatically loaded with the ENTITY_SQL_ prefix.
    For example, ENTITY_SQL_PARSER_DIALECT will override the parser_dialect
    setting. LOG_LEVEL is read without prefix so it can be shared with the
    host application.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    parser_dialect: str = Field(
        default="mysql",
        description="sqlglot dialect used to parse and render WHERE clauses",
    )

    log_to_file: bool = Field(
        default=False, description="Also write structured logs to a daily file"
    )
    log_file_dir: str = Field(
        default="logs", description="Directory for log files when log_to_file is set"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Upper-case the level name so 'debug' and 'DEBUG' are equivalent."""
        return value.upper()

    model_config = SettingsConfigDict(
        env_prefix="ENTITY_SQL_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded once and reused across
    the application lifecycle.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
