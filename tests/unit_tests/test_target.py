"""
LogTarget model tests: validation, path resolution and immutability.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from tracelog.target import EntryType, LogFormat, LogKind, LogTarget


class TestEnums:
    """Enum parsing accepts values and member names, case-insensitively"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("PlainText", LogFormat.PLAIN_TEXT),
            ("plaintext", LogFormat.PLAIN_TEXT),
            ("PLAIN_TEXT", LogFormat.PLAIN_TEXT),
            ("cmtrace", LogFormat.CMTRACE),
            ("Minimal", LogFormat.MINIMAL),
        ],
    )
    def test_log_format_parsing(self, raw: str, expected: LogFormat) -> None:
        assert LogFormat(raw) is expected

    def test_entry_type_parsing(self) -> None:
        assert EntryType("FailureAudit") is EntryType.FAILURE_AUDIT
        assert EntryType("success_audit") is EntryType.SUCCESS_AUDIT
        assert EntryType("warning") is EntryType.WARNING

    def test_unknown_value_rejected(self) -> None:
        with pytest.raises(ValueError):
            LogFormat("xml")


class TestLogTarget:
    def test_file_target_path_is_absolute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Relative paths are stored resolved against the working directory"""
        monkeypatch.chdir(tmp_path)
        target = LogTarget(kind=LogKind.FILE, path=Path("app.log"))
        assert target.path.is_absolute()
        assert target.path == (tmp_path / "app.log").resolve()

    def test_defaults(self, tmp_path: Path) -> None:
        target = LogTarget(kind=LogKind.FILE, path=tmp_path / "a.log")
        assert target.format is LogFormat.PLAIN_TEXT
        assert target.max_size == 1024 * 1024
        assert target.max_files == 3
        assert target.header is None
        assert target.is_file and not target.is_event

    def test_target_is_frozen(self, tmp_path: Path) -> None:
        target = LogTarget(kind=LogKind.FILE, path=tmp_path / "a.log")
        with pytest.raises(ValidationError):
            target.kind = LogKind.EVENT

    @pytest.mark.parametrize("max_files", [-1, 100])
    def test_max_files_range(self, tmp_path: Path, max_files: int) -> None:
        with pytest.raises(ValidationError):
            LogTarget(kind=LogKind.FILE, path=tmp_path / "a.log", max_files=max_files)

    @pytest.mark.parametrize("max_files", [0, 1, 99])
    def test_max_files_bounds_accepted(self, tmp_path: Path, max_files: int) -> None:
        target = LogTarget(kind=LogKind.FILE, path=tmp_path / "a.log", max_files=max_files)
        assert target.max_files == max_files

    @pytest.mark.parametrize("event_id", [-1, 65536])
    def test_default_event_id_range(self, event_id: int) -> None:
        with pytest.raises(ValidationError):
            LogTarget(
                kind=LogKind.EVENT,
                event_log_name="Application",
                event_log_source="Setup",
                default_event_id=event_id,
            )

    def test_default_event_id_upper_bound_accepted(self) -> None:
        target = LogTarget(
            kind=LogKind.EVENT,
            event_log_name="Application",
            event_log_source="Setup",
            default_event_id=65535,
        )
        assert target.default_event_id == 65535

    def test_max_size_must_be_positive(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError):
            LogTarget(kind=LogKind.FILE, path=tmp_path / "a.log", max_size=0)

    def test_file_target_requires_path(self) -> None:
        with pytest.raises(ValidationError):
            LogTarget(kind=LogKind.FILE)

    def test_event_target_requires_name_and_source(self) -> None:
        with pytest.raises(ValidationError):
            LogTarget(kind=LogKind.EVENT, event_log_name="Application")

    def test_event_target(self) -> None:
        target = LogTarget(
            kind=LogKind.EVENT,
            event_log_name="Application",
            event_log_source="Setup",
            default_event_id="42",
        )
        assert target.is_event
        assert target.default_event_id == 42
        assert target.path is None
