"""
Core logging configuration and initialization logic.
"""

from __future__ import annotations

import logging
import sys
import threading
from datetime import datetime, timezone
from typing import Any, TextIO

import structlog
from structlog.typing import EventDict, WrappedLogger

from .formatters import ConsoleFormatter
from .sinks import BaseSink, LogFormat, StdioSink

# =============================================================================
# Global State
# =============================================================================

_sinks: list[BaseSink] = []
_configure_lock = threading.Lock()


class LazyLogger:
    """Module-level logger handle.

    Resolves to a structlog logger on every call. When nothing has configured
    structlog yet, the tracelog pipeline (stderr) is installed first; an
    existing configuration, the host application's or a test capture, is left
    untouched.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    def __getattr__(self, attr: str) -> Any:
        ensure_configured()
        return getattr(structlog.get_logger(_name=self._name), attr)


def get_logger(name: str | None = None) -> LazyLogger:
    """Get a structured logger instance."""
    return LazyLogger(name or "tracelog")


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.pop("_name", "tracelog")
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def multi_sink_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Render log to all configured sinks. Returns empty to suppress default output."""
    for sink in _sinks:
        try:
            sink.emit(event_dict)
        except Exception:
            pass  # A broken diagnostic sink must not turn a warning into a failure
    return ""


# =============================================================================
# Configuration Logic
# =============================================================================


class _NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


_NOP_FILE = _NopFile()


class SilentPrintLoggerFactory:
    """Logger factory that returns a logger writing to nowhere."""

    def __call__(self, *args: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=_NOP_FILE)


def _initialize_sinks(fmt: str, stream: TextIO | None) -> None:
    for sink in _sinks:
        sink.close()
    _sinks.clear()

    log_format: LogFormat = "json" if fmt.lower() == "json" else "console"
    _sinks.append(StdioSink(fmt=log_format, stream=stream or sys.stderr))


def _configure_structlog(level: str) -> None:
    shared_processors = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        add_logger_name,
        rename_event_key,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [multi_sink_renderer],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.WARNING)),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    *,
    level: str | None = None,
    fmt: str | None = None,
    stream: TextIO | None = None,
    capture_stdlib: bool | None = None,
) -> None:
    """
    Configure the warning stream.

    Unset arguments fall back to ``settings.logging``.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: Output format (console, json)
        stream: Destination stream (default: stderr)
        capture_stdlib: Route stdlib ``logging`` records through the same sinks
    """
    from tracelog.config import settings

    from .interceptors import RedirectStdLibHandler

    cfg = settings.logging
    level = level or cfg.level.value
    fmt = fmt or cfg.format.value
    if capture_stdlib is None:
        capture_stdlib = cfg.capture_stdlib

    ConsoleFormatter.configure(
        timestamp_format=cfg.console_timestamp_format,
        level_width=cfg.console_level_width,
        logger_width=cfg.console_logger_width,
        separator=cfg.console_separator,
    )

    # 1. Initialize Sinks
    _initialize_sinks(fmt, stream)

    # 2. Configure Structlog
    _configure_structlog(level)

    # 3. Optionally route the stdlib root logger through our sinks
    root_logger = logging.getLogger()
    root_logger.handlers = [h for h in root_logger.handlers if not isinstance(h, RedirectStdLibHandler)]
    if capture_stdlib:
        root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
        root_logger.addHandler(RedirectStdLibHandler())


def ensure_configured() -> None:
    """Install the default pipeline unless structlog is already configured."""
    if structlog.is_configured():
        return
    with _configure_lock:
        if not structlog.is_configured():
            configure_logging()
