"""
LogFactory tests: file initialization, append semantics, event source registration.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from tracelog.exceptions import ConfigurationError, EventSinkError, LogIOError, PrivilegeError
from tracelog.factory import create_event_log, create_file_log
from tracelog.target import LogFormat, LogKind


class TestCreateFileLog:
    def test_creates_empty_file(self, log_path: Path) -> None:
        result = create_file_log(log_path)
        assert result.is_ok()
        assert log_path.exists()
        assert log_path.read_bytes() == b""
        assert result.value.kind is LogKind.FILE
        assert result.value.path == log_path.resolve()

    def test_header_is_sole_content(self, log_path: Path) -> None:
        create_file_log(log_path, header="# Setup log")
        assert log_path.read_text(encoding="utf-8") == "# Setup log\n"

    def test_overwrites_without_append(self, log_path: Path) -> None:
        log_path.parent.mkdir(parents=True)
        log_path.write_text("previous run\n", encoding="utf-8")
        create_file_log(log_path, append=False)
        assert log_path.read_text(encoding="utf-8") == ""

    def test_append_keeps_existing_content(self, log_path: Path) -> None:
        """Appending to an existing non-empty file leaves it untouched"""
        log_path.parent.mkdir(parents=True)
        log_path.write_text("line one\nline two\n", encoding="utf-8")
        result = create_file_log(log_path, header="# ignored", append=True)
        assert result.is_ok()
        assert log_path.read_text(encoding="utf-8") == "line one\nline two\n"

    def test_append_creates_missing_file(self, log_path: Path) -> None:
        create_file_log(log_path, header="# new", append=True)
        assert log_path.read_text(encoding="utf-8") == "# new\n"

    def test_header_written_as_utf8(self, log_path: Path) -> None:
        create_file_log(log_path, header="Journal d'installation: ok")
        assert log_path.read_bytes() == "Journal d'installation: ok\n".encode("utf-8")

    def test_defaults_come_from_settings(self, log_path: Path) -> None:
        target = create_file_log(log_path).value
        assert target.max_size == 1024 * 1024
        assert target.max_files == 3
        assert target.format is LogFormat.PLAIN_TEXT

    def test_format_accepts_strings(self, log_path: Path) -> None:
        target = create_file_log(log_path, format="CMTrace").value
        assert target.format is LogFormat.CMTRACE

    def test_unknown_format_is_configuration_error(self, log_path: Path) -> None:
        with capture_logs() as logs:
            result = create_file_log(log_path, format="xml")
        assert isinstance(result.error, ConfigurationError)
        assert result.value is None
        assert not log_path.exists()
        assert logs[0]["event"] == "log_target_invalid"

    @pytest.mark.parametrize("max_files", [-1, 100])
    def test_out_of_range_retention_rejected(self, log_path: Path, max_files: int) -> None:
        result = create_file_log(log_path, max_files=max_files)
        assert isinstance(result.error, ConfigurationError)
        assert result.error.code == "INVALID_TARGET"
        assert result.error.errors[0]["field"] == "max_files"
        assert not log_path.exists()

    def test_unwritable_path_warns_and_returns_target(self, tmp_path: Path) -> None:
        """A file that cannot be created is a warning, the target still comes back"""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        with capture_logs() as logs:
            result = create_file_log(blocker / "app.log")
        assert isinstance(result.error, LogIOError)
        assert result.value is not None
        assert result.value.path == (blocker / "app.log").resolve()
        warnings = [e for e in logs if e["log_level"] == "warning"]
        assert warnings[0]["event"] == "file_log_create_failed"
        assert warnings[0]["code"] == "LOG_IO_FAILED"

    def test_unencodable_header_warns_and_returns_target(self, log_path: Path) -> None:
        with capture_logs() as logs:
            result = create_file_log(log_path, header="h\udc80")
        assert isinstance(result.error, LogIOError)
        assert result.error.details["operation"] == "create"
        assert result.value is not None
        assert logs[0]["event"] == "file_log_create_failed"

    def test_raise_for_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(LogIOError):
            create_file_log(blocker / "app.log").raise_for_error()


class TestCreateEventLog:
    def test_registers_missing_source_when_elevated(self, event_sink) -> None:
        result = create_event_log("Application", "Setup", elevation_check=lambda: True)
        assert result.is_ok()
        assert event_sink.registered == [("Application", "Setup")]
        target = result.value
        assert target.kind is LogKind.EVENT
        assert target.elevated is True
        assert target.default_event_id == 0

    def test_existing_source_not_registered_again(self, event_sink) -> None:
        event_sink.sources.add(("Application", "Setup"))
        create_event_log("Application", "Setup", "7", elevation_check=lambda: True)
        assert event_sink.registered == []

    def test_not_elevated_warns(self, event_sink) -> None:
        with capture_logs() as logs:
            result = create_event_log("Application", "Setup", elevation_check=lambda: False)
        assert isinstance(result.error, PrivilegeError)
        assert result.value.elevated is False
        assert event_sink.registered == []
        assert logs[0]["event"] == "event_log_not_elevated"
        assert logs[0]["log_level"] == "warning"

    def test_registration_failure_is_warning(self, event_sink) -> None:
        event_sink.fail_with = PermissionError("access denied")
        with capture_logs() as logs:
            result = create_event_log("Application", "Setup", elevation_check=lambda: True)
        assert isinstance(result.error, EventSinkError)
        assert result.value is not None
        assert logs[-1]["event"] == "event_source_register_failed"

    def test_explicit_sink_overrides_process_sink(self, event_sink) -> None:
        other = type(event_sink)()
        create_event_log("Application", "Setup", sink=other, elevation_check=lambda: True)
        assert other.registered == [("Application", "Setup")]
        assert event_sink.registered == []

    @pytest.mark.parametrize("event_id", [-5, 65536, 70000])
    def test_invalid_event_id_rejected(self, event_sink, event_id: int) -> None:
        result = create_event_log("Application", "Setup", event_id, elevation_check=lambda: True)
        assert isinstance(result.error, ConfigurationError)
        assert event_sink.registered == []
