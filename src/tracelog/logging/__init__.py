"""
Diagnostic logging for tracelog.

tracelog never raises to its caller; failures are reported here instead,
as structured warning events. This package wires that warning stream.

Design Pattern: Strategy Pattern for sink abstraction.
Library: structlog + orjson for JSON serialization.
"""

from .core import configure_logging, ensure_configured, get_logger

__all__ = ["configure_logging", "ensure_configured", "get_logger"]
