"""
Result values returned by every tracelog operation.

An operation never raises; it reports its failure on the warning stream and
hands back a ``Result``. Callers that want the original warn-and-continue
behaviour read ``result.value``. Callers that want to escalate call
``result.raise_for_error()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from tracelog.exceptions import TraceLogError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation.

    ``value`` and ``error`` are not exclusive: a file target whose backing
    file could not be created is still returned, alongside the I/O error.
    """

    value: Optional[T] = None
    error: Optional[TraceLogError] = None

    @staticmethod
    def ok(value: Optional[T] = None) -> "Result[T]":
        return Result(value=value)

    @staticmethod
    def err(error: TraceLogError, value: Optional[T] = None) -> "Result[T]":
        return Result(value=value, error=error)

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None

    def raise_for_error(self) -> Optional[T]:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value


def report(logger: Any, event: str, error: TraceLogError, value: Optional[T] = None) -> Result[T]:
    """Emit ``error`` as a warning on ``logger`` and wrap it in a Result."""
    logger.warning(event, code=error.code, error=error.message, **error.details)
    return Result.err(error, value=value)


__all__ = ["Result", "report"]
