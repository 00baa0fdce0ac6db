"""
Console rendering for diagnostic events.
"""

from __future__ import annotations

from datetime import datetime, timezone

from structlog.typing import EventDict

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "logger": "\033[35m",
    "key": "\033[34m",
}

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[1;31m",
}


def colorize(text: str, color: str, enabled: bool = True) -> str:
    """Apply ANSI color to text."""
    if not enabled or color not in COLORS:
        return text
    return f"{COLORS[color]}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Renders one event as ``timestamp | LEVEL | logger | message key=value ...``."""

    EXCLUDED_KEYS = {"level", "message", "event", "logger", "timestamp", "_name"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    TIMESTAMP_WIDTH = 19
    LEVEL_WIDTH = 8
    LOGGER_WIDTH = 24
    SEPARATOR = " | "

    @classmethod
    def configure(
        cls,
        *,
        timestamp_format: str | None = None,
        level_width: int | None = None,
        logger_width: int | None = None,
        separator: str | None = None,
    ) -> None:
        """Configure alignment and rendering parameters."""
        if timestamp_format:
            cls.TIMESTAMP_FORMAT = timestamp_format
            cls.TIMESTAMP_WIDTH = len(datetime.now().strftime(timestamp_format))
        if level_width:
            cls.LEVEL_WIDTH = level_width
        if logger_width:
            cls.LOGGER_WIDTH = logger_width
        if separator is not None:
            cls.SEPARATOR = separator

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            text = text[-width:] if width <= 3 else "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                dt = datetime.fromisoformat(raw_timestamp.replace("Z", "+00:00"))
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = True) -> str:
        """Format an event dict into an aligned string."""
        level = str(event_dict.get("level", "info")).upper()
        message = str(event_dict.get("message", event_dict.get("event", "")))
        logger_name = str(event_dict.get("logger", "tracelog"))

        extras = [
            f"{colorize(k, 'key', use_color)}={colorize(str(v), 'dim', use_color)}"
            for k, v in event_dict.items()
            if k not in cls.EXCLUDED_KEYS
        ]
        if extras:
            message = f"{message} " + " ".join(extras)

        level_text = cls._fit_right(level, cls.LEVEL_WIDTH)
        if use_color and level in LEVEL_COLORS:
            level_text = f"{LEVEL_COLORS[level]}{level_text}{COLORS['reset']}"

        return cls.SEPARATOR.join(
            [
                colorize(cls._fit_right(cls._format_timestamp(event_dict.get("timestamp")), cls.TIMESTAMP_WIDTH), "timestamp", use_color),
                level_text,
                colorize(cls._fit_right(logger_name, cls.LOGGER_WIDTH), "logger", use_color),
                message,
            ]
        )
