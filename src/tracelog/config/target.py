"""
Log Target Defaults.

Values used by the factory when a caller leaves a parameter unset.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tracelog.target import LogFormat


class TargetSettings(BaseSettings):
    """Default sizing, retention and formatting for file targets."""

    model_config = SettingsConfigDict(
        env_prefix="TL_TARGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    max_size: int = Field(default=1024 * 1024, gt=0, description="Rotation threshold in bytes")
    max_files: int = Field(default=3, ge=0, le=99, description="Active file plus retained archives")
    format: LogFormat = Field(default=LogFormat.PLAIN_TEXT, description="Line format for file targets")
    plain_text_timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="strftime pattern for the PlainText timestamp column",
    )
