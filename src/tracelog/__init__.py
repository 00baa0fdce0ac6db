from tracelog.exceptions import (
    ConfigurationError,
    EventSinkError,
    LogIOError,
    NoDefaultTarget,
    PrivilegeError,
    TraceLogError,
)
from tracelog.factory import create_event_log, create_file_log
from tracelog.result import Result
from tracelog.rotator import rotate
from tracelog.target import EntryType, LogFormat, LogKind, LogTarget
from tracelog.writer import write

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "EntryType",
    "EventSinkError",
    "LogFormat",
    "LogIOError",
    "LogKind",
    "LogTarget",
    "NoDefaultTarget",
    "PrivilegeError",
    "Result",
    "TraceLogError",
    "create_event_log",
    "create_file_log",
    "rotate",
    "write",
]
