"""
Process-wide named locks.

The same name always yields the same lock object, so every writer in the
process that asks for ``WRITE_LOCK_NAME`` serializes on one mutex,
whatever target it writes to.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

WRITE_LOCK_NAME = "tracelog.write"

_locks: dict[str, threading.Lock] = {}
_registry_lock = threading.Lock()


def named_lock(name: str) -> threading.Lock:
    """Return the lock registered under ``name``, creating it on first use."""
    with _registry_lock:
        lock = _locks.get(name)
        if lock is None:
            lock = _locks[name] = threading.Lock()
        return lock


@contextmanager
def hold(name: str = WRITE_LOCK_NAME) -> Iterator[threading.Lock]:
    """Block until the named lock is acquired; release it on every exit path."""
    lock = named_lock(name)
    lock.acquire()
    try:
        yield lock
    finally:
        lock.release()
