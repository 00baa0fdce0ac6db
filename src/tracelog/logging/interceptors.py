"""
Interceptor for routing standard library log records into the warning stream.
"""

import logging

from .core import get_logger


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging events to structlog, so records from
    applications that log through ``logging`` land on the same sinks as
    tracelog's own warnings.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Skip structlog's own records to avoid loops
            if "structlog" in record.name:
                return
            msg = self.format(record)
            get_logger(record.name or "stdlib").log(getattr(logging, record.levelname, logging.INFO), msg)
        except Exception:
            self.handleError(record)
