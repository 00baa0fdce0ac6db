"""
Default target wrapper tests.
"""

from __future__ import annotations

from pathlib import Path

from structlog.testing import capture_logs

from tracelog import default
from tracelog.exceptions import NoDefaultTarget, TraceLogError
from tracelog.target import LogFormat


class TestDefaultTarget:
    def test_log_before_init_warns(self) -> None:
        with capture_logs() as logs:
            result = default.log("nowhere", passthru=True)
        assert isinstance(result.error, NoDefaultTarget)
        assert isinstance(result.error, TraceLogError)
        assert result.error.code == "NO_DEFAULT_TARGET"
        assert result.value == "nowhere"
        assert logs[0]["event"] == "default_target_missing"

    def test_init_file_log_and_log(self, log_path: Path) -> None:
        result = default.init_file_log(log_path, format="Minimal")
        assert result.is_ok()
        assert default.current_target() == result.value
        assert default.current_target().format is LogFormat.MINIMAL

        default.log("one")
        default.log("two")
        assert log_path.read_text(encoding="utf-8") == "one\ntwo\n"

    def test_shutdown_clears_target(self, log_path: Path) -> None:
        default.init_file_log(log_path)
        default.shutdown()
        assert default.current_target() is None

    def test_failed_init_keeps_previous_target(self, log_path: Path) -> None:
        first = default.init_file_log(log_path).value
        default.init_file_log(log_path.with_name("other.log"), max_files=500)
        assert default.current_target() == first

    def test_init_event_log(self, event_sink, monkeypatch) -> None:
        monkeypatch.setattr("tracelog.factory.is_elevated", lambda: True)
        default.init_event_log("Application", "Setup", 9)
        default.log("ready")
        assert event_sink.records[0]["event_id"] == 9
        assert event_sink.records[0]["message"] == "ready"
