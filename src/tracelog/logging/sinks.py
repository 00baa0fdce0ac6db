"""
Diagnostic sink abstractions and the stdio implementation.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, Literal

import orjson
from structlog.typing import EventDict

from .formatters import ConsoleFormatter

LogFormat = Literal["console", "json"]


def orjson_dumps(v: Any) -> str:
    """JSON serialization using orjson; unknown objects fall back to ``str``."""
    return orjson.dumps(v, default=str, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


class BaseSink(ABC):
    """Abstract base class for diagnostic sinks."""

    @abstractmethod
    def emit(self, event_dict: EventDict) -> None:
        """Emit a log event to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class StdioSink(BaseSink):
    """Standard I/O sink with configurable format.

    Args:
        fmt: Output format - "console" (aligned, colored on a tty) or "json"
        stream: Output stream (default: stderr)
    """

    def __init__(self, fmt: LogFormat = "console", stream: Any = None):
        self._fmt = fmt
        self._stream = stream or sys.stderr

    def emit(self, event_dict: EventDict) -> None:
        if self._fmt == "json":
            output = orjson_dumps(event_dict)
        else:
            use_color = bool(getattr(self._stream, "isatty", lambda: False)())
            output = ConsoleFormatter.format(event_dict, use_color=use_color)

        self._stream.write(output + "\n")
        self._stream.flush()

    def close(self) -> None:
        pass
