"""
OS event log sink.

The operating system's event log is treated as an opaque sink behind
``EventSink``. ``WindowsEventSink`` talks to the Windows Event Log through
pywin32; on other platforms it reports itself unavailable and every call
fails with ``EventSinkError``.

Design Pattern: Strategy Pattern, the process-wide sink can be swapped with
``set_event_sink`` (tests install an in-memory one).
"""

from __future__ import annotations

import os
import sys
import threading
from abc import ABC, abstractmethod
from typing import Any, Optional

from tracelog.exceptions import EventSinkError
from tracelog.target import EntryType

EVENT_LOG_REGISTRY_ROOT = r"SYSTEM\CurrentControlSet\Services\EventLog"


def is_elevated() -> bool:
    """Whether the current process runs with administrative rights."""
    if sys.platform == "win32":
        import ctypes

        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except OSError:
            return False
    return hasattr(os, "geteuid") and os.geteuid() == 0


# =============================================================================
# Sink Abstraction
# =============================================================================


class EventSink(ABC):
    """Abstract OS event log."""

    @abstractmethod
    def source_exists(self, log_name: str, source: str) -> bool:
        """Whether ``source`` is registered under ``log_name``."""
        ...

    @abstractmethod
    def register_source(self, log_name: str, source: str) -> None:
        """Register ``source`` under ``log_name``."""
        ...

    @abstractmethod
    def report(self, log_name: str, source: str, message: str, entry_type: EntryType, event_id: int) -> None:
        """Write one entry to the event log."""
        ...


class WindowsEventSink(EventSink):
    """Windows Event Log via pywin32."""

    def __init__(self) -> None:
        try:
            import win32evtlog
            import win32evtlogutil

            self._evtlog: Any = win32evtlog
            self._evtlogutil: Any = win32evtlogutil
            self._available = True
        except ImportError:
            self._evtlog = None
            self._evtlogutil = None
            self._available = False

    @property
    def available(self) -> bool:
        return self._available

    def _require(self, log_name: str, source: str, operation: str) -> None:
        if not self._available:
            raise EventSinkError(
                log_name=log_name,
                source=source,
                operation=operation,
                reason="the Windows event log is not available on this platform",
            )

    def _event_type(self, entry_type: EntryType) -> int:
        mapping = {
            EntryType.ERROR: self._evtlog.EVENTLOG_ERROR_TYPE,
            EntryType.FAILURE_AUDIT: self._evtlog.EVENTLOG_AUDIT_FAILURE,
            EntryType.INFORMATION: self._evtlog.EVENTLOG_INFORMATION_TYPE,
            EntryType.SUCCESS_AUDIT: self._evtlog.EVENTLOG_AUDIT_SUCCESS,
            EntryType.WARNING: self._evtlog.EVENTLOG_WARNING_TYPE,
        }
        return mapping.get(entry_type, self._evtlog.EVENTLOG_INFORMATION_TYPE)

    def source_exists(self, log_name: str, source: str) -> bool:
        self._require(log_name, source, "lookup")
        import winreg

        try:
            with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, rf"{EVENT_LOG_REGISTRY_ROOT}\{log_name}\{source}"):
                return True
        except FileNotFoundError:
            return False

    def register_source(self, log_name: str, source: str) -> None:
        self._require(log_name, source, "register")
        self._evtlogutil.AddSourceToRegistry(source, eventLogType=log_name)

    def report(self, log_name: str, source: str, message: str, entry_type: EntryType, event_id: int) -> None:
        self._require(log_name, source, "report")
        self._evtlogutil.ReportEvent(source, event_id, eventType=self._event_type(entry_type), strings=[message])


# =============================================================================
# Process-wide Sink
# =============================================================================

_sink: Optional[EventSink] = None
_sink_lock = threading.Lock()


def get_event_sink() -> EventSink:
    """Return the process-wide event sink, creating the platform one on first use."""
    global _sink
    with _sink_lock:
        if _sink is None:
            _sink = WindowsEventSink()
        return _sink


def set_event_sink(sink: Optional[EventSink]) -> Optional[EventSink]:
    """Install ``sink`` as the process-wide event sink and return the previous one."""
    global _sink
    with _sink_lock:
        previous, _sink = _sink, sink
        return previous


__all__ = [
    "EventSink",
    "WindowsEventSink",
    "get_event_sink",
    "set_event_sink",
    "is_elevated",
]
