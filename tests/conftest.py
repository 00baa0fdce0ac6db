from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest
import structlog

from tracelog import default
from tracelog.eventlog import EventSink, set_event_sink
from tracelog.target import EntryType


class MemoryEventSink(EventSink):
    """In-memory event log recording every registration and report."""

    def __init__(self, sources: set[tuple[str, str]] | None = None, fail_with: Exception | None = None):
        self.sources = set(sources or ())
        self.registered: list[tuple[str, str]] = []
        self.records: list[dict] = []
        self.fail_with = fail_with

    def source_exists(self, log_name: str, source: str) -> bool:
        return (log_name, source) in self.sources

    def register_source(self, log_name: str, source: str) -> None:
        if self.fail_with:
            raise self.fail_with
        self.sources.add((log_name, source))
        self.registered.append((log_name, source))

    def report(self, log_name: str, source: str, message: str, entry_type: EntryType, event_id: int) -> None:
        if self.fail_with:
            raise self.fail_with
        self.records.append(
            {"log_name": log_name, "source": source, "message": message, "entry_type": entry_type, "event_id": event_id}
        )


@pytest.fixture
def event_sink():
    """Install an in-memory event sink as the process-wide sink."""
    sink = MemoryEventSink()
    previous = set_event_sink(sink)
    yield sink
    set_event_sink(previous)


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "app.log"


@pytest.fixture(autouse=True)
def reset_state():
    yield
    default.shutdown()
    structlog.reset_defaults()


@pytest.fixture
def make_archive():
    """Create an archive of ``path`` named with ``stamp`` and modified at ``mtime``."""

    def _make(path: Path, stamp: str, mtime: datetime, content: str = "old\n") -> Path:
        archive = path.with_name(f"{path.stem}{stamp}{path.suffix}")
        archive.parent.mkdir(parents=True, exist_ok=True)
        archive.write_text(content, encoding="utf-8")
        ts = mtime.timestamp()
        os.utime(archive, (ts, ts))
        return archive

    return _make
