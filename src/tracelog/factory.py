"""
Log target construction.

Builds a ``LogTarget`` and prepares its backing storage: an empty or
headered file for file targets, a registered event source for event targets.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from tracelog.config import settings
from tracelog.eventlog import EventSink, get_event_sink, is_elevated
from tracelog.exceptions import ConfigurationError, EventSinkError, LogIOError, PrivilegeError
from tracelog.logging import get_logger
from tracelog.result import Result, report
from tracelog.target import LogFormat, LogKind, LogTarget

logger = get_logger("tracelog.factory")

ENCODING = "utf-8"


def initialize_file(path: Path, header: Optional[str]) -> None:
    """(Re)create ``path`` holding only ``header``, or nothing.

    Raises:
        OSError: the file could not be written
        UnicodeError: the header cannot be encoded
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding=ENCODING, newline="") as fh:
        if header is not None:
            fh.write(header + "\n")


def _build_target(**fields) -> Result[LogTarget]:
    try:
        return Result.ok(LogTarget(**fields))
    except ValidationError as exc:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]) or "target", "message": err["msg"]}
            for err in exc.errors()
        ]
        summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        return report(logger, "log_target_invalid", ConfigurationError(f"Invalid log target: {summary}", errors=errors))


def create_file_log(
    path: str | Path,
    header: Optional[str] = None,
    append: bool = False,
    max_size: Optional[int] = None,
    max_files: Optional[int] = None,
    format: LogFormat | str | None = None,
) -> Result[LogTarget]:
    """Create a file target.

    Unless ``append`` is set and the file already exists, the file is
    (re)created with ``header`` as its sole content. A failure to create the
    file is reported as a warning; the target is returned anyway so later
    writes surface the same error.

    Args:
        path: Log file path, stored in absolute form
        header: Text written to a freshly created file
        append: Keep an existing file's content
        max_size: Rotation threshold in bytes (default ``settings.target.max_size``)
        max_files: Retention count, 0 to 99 (default ``settings.target.max_files``)
        format: Minimal, PlainText or CMTrace (default ``settings.target.format``)
    """
    defaults = settings.target
    if isinstance(format, str):
        try:
            format = LogFormat(format)
        except ValueError:
            error = ConfigurationError(
                f"Invalid log target: format: unknown format '{format}'",
                errors=[{"field": "format", "message": f"unknown format '{format}'"}],
            )
            return report(logger, "log_target_invalid", error)

    result = _build_target(
        kind=LogKind.FILE,
        path=Path(path),
        header=header,
        max_size=defaults.max_size if max_size is None else max_size,
        max_files=defaults.max_files if max_files is None else max_files,
        format=format or defaults.format,
    )
    if result.is_err():
        return result

    target = result.value
    if append and target.path.exists():
        logger.debug("file_log_appending", path=str(target.path))
        return result

    try:
        initialize_file(target.path, target.header)
    except (OSError, UnicodeError) as exc:
        return report(
            logger,
            "file_log_create_failed",
            LogIOError(path=target.path, operation="create", reason=str(exc)),
            value=target,
        )

    logger.debug("file_log_created", path=str(target.path), format=target.format.value)
    return result


def create_event_log(
    name: str,
    source: str,
    default_event_id: int | str = 0,
    *,
    sink: Optional[EventSink] = None,
    elevation_check: Optional[Callable[[], bool]] = None,
) -> Result[LogTarget]:
    """Create an event log target, registering ``source`` under ``name`` if needed.

    Without elevation nothing is registered: a warning is emitted and the
    returned target has ``elevated=False``, so writes against it are refused.
    """
    elevated = bool((elevation_check or is_elevated)())
    result = _build_target(
        kind=LogKind.EVENT,
        event_log_name=name,
        event_log_source=source,
        default_event_id=default_event_id,
        elevated=elevated,
    )
    if result.is_err():
        return result

    target = result.value
    if not elevated:
        return report(
            logger,
            "event_log_not_elevated",
            PrivilegeError(log_name=name, source=source, operation="create"),
            value=target,
        )

    sink = sink or get_event_sink()
    try:
        if not sink.source_exists(name, source):
            sink.register_source(name, source)
            logger.info("event_source_registered", log_name=name, source=source)
    except EventSinkError as exc:
        return report(logger, "event_source_register_failed", exc, value=target)
    except Exception as exc:
        error = EventSinkError(log_name=name, source=source, operation="register", reason=str(exc))
        return report(logger, "event_source_register_failed", error, value=target)

    return result


__all__ = ["create_file_log", "create_event_log", "initialize_file", "ENCODING"]
