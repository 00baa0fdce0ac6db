"""
tracelog error hierarchy.

Errors are split along the three failure dimensions of a log target:
configuration (rejected at creation), privilege (event sink without
elevation) and I/O (file or event sink failures). None of them is raised
to callers by the public operations; they travel inside a ``Result`` and
are reported on the warning stream.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TraceLogError(Exception):
    """Base class for every tracelog error.

    Carries a stable machine-readable ``code`` and a ``details`` mapping
    that is also attached to the warning event.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.details}


# ================================
# Configuration errors
# ================================


class ConfigurationError(TraceLogError):
    """Invalid target parameters, e.g. an out-of-range retention count."""

    def __init__(self, message: str, *, errors: Optional[list[Dict[str, Any]]] = None) -> None:
        super().__init__(message, code="INVALID_TARGET", details={"errors": errors or []})
        self.errors = errors or []


# ================================
# Privilege errors
# ================================


class PrivilegeError(TraceLogError):
    """Event sink creation or write attempted without elevation."""

    def __init__(self, *, log_name: Optional[str], source: Optional[str], operation: str) -> None:
        message = f"Cannot {operation} event log '{log_name}' (source '{source}'): process is not elevated"
        super().__init__(
            message,
            code="NOT_ELEVATED",
            details={"log_name": log_name, "source": source, "operation": operation},
        )


# ================================
# I/O errors
# ================================


class LogIOError(TraceLogError):
    """File creation, append, copy or delete failure."""

    def __init__(self, *, path: Any, operation: str, reason: str) -> None:
        message = f"Failed to {operation} '{path}': {reason}"
        super().__init__(
            message,
            code="LOG_IO_FAILED",
            details={"path": str(path), "operation": operation, "reason": reason},
        )


class EventSinkError(TraceLogError):
    """Event source registration or event report failure."""

    def __init__(self, *, log_name: Optional[str], source: Optional[str], operation: str, reason: str) -> None:
        message = f"Event sink {operation} failed for '{log_name}' (source '{source}'): {reason}"
        super().__init__(
            message,
            code="EVENT_SINK_FAILED",
            details={"log_name": log_name, "source": source, "operation": operation, "reason": reason},
        )


# ================================
# Usage errors
# ================================


class NoDefaultTarget(TraceLogError):
    """The default-target wrapper was used before a target was initialized."""

    def __init__(self) -> None:
        super().__init__(
            "No default log target; call init_file_log or init_event_log first",
            code="NO_DEFAULT_TARGET",
        )


__all__ = [
    "TraceLogError",
    "ConfigurationError",
    "PrivilegeError",
    "LogIOError",
    "EventSinkError",
    "NoDefaultTarget",
]
