"""
Process-scoped default target.

A convenience layer over the explicit API for scripts that log to a single
place::

    from tracelog import default

    default.init_file_log("logs/setup.log", format="CMTrace")
    default.log("Starting")
    default.shutdown()

Passing a ``LogTarget`` to ``tracelog.write`` remains the primary API.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from tracelog.exceptions import NoDefaultTarget
from tracelog.factory import create_event_log, create_file_log
from tracelog.logging import ensure_configured, get_logger
from tracelog.result import Result, report
from tracelog.target import EntryType, LogFormat, LogTarget
from tracelog.writer import write

logger = get_logger("tracelog.default")

_target: Optional[LogTarget] = None
_lock = threading.Lock()


def _install(result: Result[LogTarget]) -> Result[LogTarget]:
    global _target
    if result.value is not None:
        with _lock:
            _target = result.value
    return result


def init_file_log(
    path: str | Path,
    header: Optional[str] = None,
    append: bool = False,
    max_size: Optional[int] = None,
    max_files: Optional[int] = None,
    format: LogFormat | str | None = None,
) -> Result[LogTarget]:
    """Create a file target and make it the process default."""
    ensure_configured()
    return _install(create_file_log(path, header, append, max_size, max_files, format))


def init_event_log(name: str, source: str, default_event_id: int | str = 0) -> Result[LogTarget]:
    """Create an event log target and make it the process default."""
    ensure_configured()
    return _install(create_event_log(name, source, default_event_id))


def current_target() -> Optional[LogTarget]:
    return _target


def log(
    entry: str,
    entry_type: EntryType | str = EntryType.INFORMATION,
    event_id: Optional[int] = None,
    *,
    passthru: bool = False,
) -> Result[str]:
    """Write ``entry`` to the default target."""
    target = _target
    if target is None:
        return report(logger, "default_target_missing", NoDefaultTarget(), value=entry if passthru else None)
    return write(target, entry, entry_type, event_id, passthru=passthru)


def shutdown() -> None:
    """Forget the default target."""
    global _target
    with _lock:
        _target = None


__all__ = ["init_file_log", "init_event_log", "current_target", "log", "shutdown"]
