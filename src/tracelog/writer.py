"""
Entry formatting and serialized writes.

File targets: the entry is formatted per ``target.format`` and appended
under the process-wide write lock, then the rotator runs. Rotation happens
after the lock is released, so concurrent writers may race on it.

Event targets: the entry is handed to the event sink, provided the target
was created with elevation.
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Optional

from tracelog import locks
from tracelog.config import settings
from tracelog.eventlog import EventSink, get_event_sink
from tracelog.exceptions import ConfigurationError, EventSinkError, LogIOError, PrivilegeError
from tracelog.factory import ENCODING
from tracelog.logging import get_logger
from tracelog.result import Result, report
from tracelog.rotator import rotate
from tracelog.target import MAX_EVENT_ID, EntryType, LogFormat, LogTarget

logger = get_logger("tracelog.writer")

CMTRACE_TYPE_CODES = {
    EntryType.ERROR: 3,
    EntryType.FAILURE_AUDIT: 3,
    EntryType.INFORMATION: 1,
    EntryType.SUCCESS_AUDIT: 1,
    EntryType.WARNING: 2,
}

CMTRACE_LINE = (
    '<![LOG[{entry}]LOG]!><time="{time}" date="{date}" component="" context="" '
    'type="{type_code}" thread="{thread}" file="">'
)


def _coerce_entry_type(entry_type: EntryType | str) -> EntryType | str:
    if isinstance(entry_type, EntryType):
        return entry_type
    try:
        return EntryType(entry_type)
    except ValueError:
        return entry_type


# =============================================================================
# Formatting
# =============================================================================


def format_plain_text(entry: str, entry_type: EntryType | str, now: datetime) -> str:
    stamp = now.strftime(settings.target.plain_text_timestamp_format)
    label = entry_type.value if isinstance(entry_type, EntryType) else str(entry_type)
    return f"{stamp} {label.upper()} {entry}"


def format_cmtrace(entry: str, entry_type: EntryType | str, now: datetime) -> str:
    """Render a CMTrace line.

    component, context and file are always empty; thread carries the
    process id.
    """
    return CMTRACE_LINE.format(
        entry=entry,
        time=now.strftime("%H:%M:%S.%f"),
        date=now.strftime("%m-%d-%Y"),
        type_code=CMTRACE_TYPE_CODES.get(entry_type, 1),
        thread=os.getpid(),
    )


def format_entry(
    log_format: LogFormat,
    entry: str,
    entry_type: EntryType | str = EntryType.INFORMATION,
    now: Optional[datetime] = None,
) -> str:
    """Format one entry for a file target (without the line terminator)."""
    entry_type = _coerce_entry_type(entry_type)
    now = now or datetime.now()
    if log_format is LogFormat.MINIMAL:
        return entry
    if log_format is LogFormat.CMTRACE:
        return format_cmtrace(entry, entry_type, now)
    return format_plain_text(entry, entry_type, now)


# =============================================================================
# Writing
# =============================================================================


def _write_file(target: LogTarget, entry: str, entry_type: EntryType | str) -> Result[None]:
    try:
        with locks.hold(locks.WRITE_LOCK_NAME):
            line = format_entry(target.format, entry, entry_type)
            with open(target.path, "a", encoding=ENCODING, newline="") as fh:
                fh.write(line + "\n")
    except (OSError, UnicodeError) as exc:
        return report(logger, "log_write_failed", LogIOError(path=target.path, operation="append", reason=str(exc)))

    return rotate(target)


def _write_event(
    target: LogTarget,
    entry: str,
    entry_type: EntryType | str,
    event_id: Optional[int],
    sink: Optional[EventSink],
) -> Result[None]:
    if not target.elevated:
        return report(
            logger,
            "event_write_refused",
            PrivilegeError(log_name=target.event_log_name, source=target.event_log_source, operation="write"),
        )

    if event_id is not None and not 0 <= event_id <= MAX_EVENT_ID:
        message = f"event_id must be between 0 and {MAX_EVENT_ID}, got {event_id}"
        error = ConfigurationError(
            f"Invalid event id: {message}",
            errors=[{"field": "event_id", "message": message}],
        )
        return report(logger, "event_id_invalid", error)

    if not isinstance(entry_type, EntryType):
        entry_type = EntryType.INFORMATION
    sink = sink or get_event_sink()
    try:
        sink.report(
            target.event_log_name,
            target.event_log_source,
            entry,
            entry_type,
            target.default_event_id if event_id is None else event_id,
        )
    except EventSinkError as exc:
        return report(logger, "event_write_failed", exc)
    except Exception as exc:
        error = EventSinkError(
            log_name=target.event_log_name,
            source=target.event_log_source,
            operation="report",
            reason=str(exc),
        )
        return report(logger, "event_write_failed", error)
    return Result.ok()


def write(
    target: LogTarget,
    entry: str,
    entry_type: EntryType | str = EntryType.INFORMATION,
    event_id: Optional[int] = None,
    *,
    passthru: bool = False,
    sink: Optional[EventSink] = None,
) -> Result[str]:
    """Write one entry to ``target``.

    Failures never raise; they are reported on the warning stream and carried
    by the returned Result. With ``passthru`` the original entry text is the
    result value whether or not the write succeeded.

    Args:
        target: Destination created by ``tracelog.factory``
        entry: Entry text
        entry_type: Error, FailureAudit, Information, SuccessAudit or Warning
        event_id: Event id for event targets (default ``target.default_event_id``)
        passthru: Return the entry text as the result value
        sink: Event sink override (default: the process-wide sink)
    """
    entry_type = _coerce_entry_type(entry_type)
    if target.is_event:
        outcome = _write_event(target, entry, entry_type, event_id, sink)
    else:
        outcome = _write_file(target, entry, entry_type)

    return Result(value=entry if passthru else None, error=outcome.error)


__all__ = ["write", "format_entry", "format_plain_text", "format_cmtrace", "CMTRACE_TYPE_CODES"]
