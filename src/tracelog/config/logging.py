"""
Diagnostic Logging Configuration.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DiagnosticFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LoggingSettings(BaseSettings):
    """Configuration of the warning stream tracelog reports its own failures on."""

    model_config = SettingsConfigDict(
        env_prefix="TL_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    format: DiagnosticFormat = Field(default=DiagnosticFormat.CONSOLE, description="Output format")
    capture_stdlib: bool = Field(default=False, description="Route stdlib logging records through structlog")
    console_timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Console timestamp format",
    )
    console_level_width: int = Field(default=8, description="Console level column width")
    console_logger_width: int = Field(default=24, description="Console logger column width")
    console_separator: str = Field(default=" | ", description="Console column separator")
