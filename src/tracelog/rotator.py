"""
Size-triggered rollover and retention pruning for file targets.

Archives live next to the active file and are named
``<stem><yyyyMMddHHmmss><suffix>``. That naming is persisted state: existing
archives are recognised by it when pruning.
"""

from __future__ import annotations

import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from tracelog.exceptions import LogIOError
from tracelog.factory import initialize_file
from tracelog.logging import get_logger
from tracelog.result import Result, report
from tracelog.target import LogTarget

logger = get_logger("tracelog.rotator")

ARCHIVE_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
ARCHIVE_TIMESTAMP_DIGITS = 14


def archive_name(path: Path, when: Optional[datetime] = None) -> Path:
    """Archive path for ``path`` stamped with ``when`` (default: now, local time)."""
    stamp = (when or datetime.now()).strftime(ARCHIVE_TIMESTAMP_FORMAT)
    return path.with_name(f"{path.stem}{stamp}{path.suffix}")


def list_archives(path: Path) -> List[Path]:
    """Archives of ``path``, oldest first by modification time."""
    pattern = re.compile(
        rf"^{re.escape(path.stem)}\d{{{ARCHIVE_TIMESTAMP_DIGITS}}}{re.escape(path.suffix)}$"
    )
    archives = [p for p in path.parent.iterdir() if p.is_file() and pattern.match(p.name)]
    return sorted(archives, key=lambda p: p.stat().st_mtime)


def prune_archives(path: Path, max_files: int) -> List[Path]:
    """Delete the oldest archives so archives plus the active file fit ``max_files``.

    Returns the deleted paths.

    Raises:
        OSError: listing or deleting failed
    """
    archives = list_archives(path)
    excess = len(archives) + 1 - max_files
    if excess <= 0:
        return []

    deleted = []
    for archive in archives[:excess]:
        archive.unlink()
        deleted.append(archive)
    return deleted


def rotate(target: LogTarget) -> Result[Path]:
    """Roll ``target`` over if it has reached ``max_size``.

    The result value is the new archive path when a rollover happened.
    Failures are reported as warnings; a partial rotation (archive copied but
    the active file not reset, for example) is left as is.
    """
    if not target.is_file or target.max_files == 1:
        return Result.ok()

    path = target.path
    step = "stat"
    try:
        if path.stat().st_size < target.max_size:
            return Result.ok()

        step = "copy"
        archive = archive_name(path)
        shutil.copy2(path, archive)

        step = "truncate"
        initialize_file(path, target.header)

        deleted: List[Path] = []
        if target.max_files > 0:
            step = "prune"
            deleted = prune_archives(path, target.max_files)
    except (OSError, UnicodeError) as exc:
        return report(logger, "log_rotate_failed", LogIOError(path=path, operation=step, reason=str(exc)))

    logger.info(
        "log_rotated",
        path=str(path),
        archive=archive.name,
        pruned=[p.name for p in deleted],
    )
    return Result.ok(archive)


__all__ = ["rotate", "archive_name", "list_archives", "prune_archives"]
