"""
Log target descriptor.

A ``LogTarget`` says where entries go and how they are laid out. It is
created once by ``tracelog.factory`` and only ever read afterwards.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MAX_RETAINED_FILES = 99
MAX_EVENT_ID = 65535


class _NamedEnum(str, Enum):
    """String enum that also accepts its member names, case-insensitively."""

    @classmethod
    def _missing_(cls, value: object):
        if not isinstance(value, str):
            return None
        needle = value.replace("_", "").replace("-", "").lower()
        for member in cls:
            if needle in (member.value.lower(), member.name.replace("_", "").lower()):
                return member
        return None


class LogKind(_NamedEnum):
    FILE = "FileLog"
    EVENT = "EventLog"


class LogFormat(_NamedEnum):
    MINIMAL = "Minimal"
    PLAIN_TEXT = "PlainText"
    CMTRACE = "CMTrace"


class EntryType(_NamedEnum):
    ERROR = "Error"
    FAILURE_AUDIT = "FailureAudit"
    INFORMATION = "Information"
    SUCCESS_AUDIT = "SuccessAudit"
    WARNING = "Warning"


class LogTarget(BaseModel):
    """Where and how log entries are written.

    File targets carry ``path`` (always absolute), ``format``, ``header``,
    ``max_size`` and ``max_files``. Event targets carry the event log name,
    source and whether the creating process was elevated.

    ``max_files`` semantics:
    - 0: unlimited archives are kept
    - 1: never rotate, the file grows unbounded
    - N > 1: keep N - 1 archives plus the active file
    """

    model_config = ConfigDict(frozen=True)

    kind: LogKind
    path: Optional[Path] = None
    format: LogFormat = LogFormat.PLAIN_TEXT
    header: Optional[str] = None
    max_size: int = Field(default=1024 * 1024, gt=0)
    max_files: int = Field(default=3, ge=0, le=MAX_RETAINED_FILES)
    event_log_name: Optional[str] = None
    event_log_source: Optional[str] = None
    default_event_id: int = Field(default=0, ge=0, le=MAX_EVENT_ID)
    elevated: bool = False

    @field_validator("path")
    @classmethod
    def resolve_path(cls, v: Optional[Path]) -> Optional[Path]:
        """Store file paths in absolute form."""
        if v is None:
            return v
        return Path(v).expanduser().resolve()

    @model_validator(mode="after")
    def check_kind_fields(self) -> "LogTarget":
        if self.kind is LogKind.FILE and self.path is None:
            raise ValueError("a FileLog target requires a path")
        if self.kind is LogKind.EVENT and not (self.event_log_name and self.event_log_source):
            raise ValueError("an EventLog target requires event_log_name and event_log_source")
        return self

    @property
    def is_file(self) -> bool:
        return self.kind is LogKind.FILE

    @property
    def is_event(self) -> bool:
        return self.kind is LogKind.EVENT


__all__ = ["EntryType", "LogFormat", "LogKind", "LogTarget", "MAX_EVENT_ID", "MAX_RETAINED_FILES"]
