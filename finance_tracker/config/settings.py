"""
Configuration Management for Finance Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every setting can be overridden with a FINANCE_TRACKER_* environment
variable or a line in the local .env file.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage
    ledger_file: Path = Field(
        default=Path("transactions.csv"),
        description="Path to the pipe-delimited transaction file"
    )
    file_encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read and append the ledger file"
    )
    strict_field_count: bool = Field(
        default=False,
        description=(
            "Abort the load on lines with the wrong number of fields "
            "instead of skipping them"
        )
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Standard library log level name"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG logging)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept level names the logging module knows about."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def effective_log_level(self) -> int:
        """Numeric log level, honouring debug_mode."""
        if self.debug_mode:
            return logging.DEBUG
        return logging.getLevelName(self.log_level)


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
