"""
tracelog Configuration Module.

Implements the Nested Settings Pattern: each sub-module is an independent
concern with its own environment variable prefix.

Usage:
    from tracelog.config import settings

    settings.target.max_size
    settings.logging.level
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import LoggingSettings
from .target import TargetSettings


class Settings(BaseSettings):
    """
    Composite settings aggregating the configuration domains.

    Sub-settings are loaded lazily, each from its own env prefix.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def target(self) -> TargetSettings:
        return TargetSettings()

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


# Singleton instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "LoggingSettings",
    "TargetSettings",
]
