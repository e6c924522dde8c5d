"""Process-wide bookkeeping of fonts already handed to the platform.

Architecture
: `RegistrationCache` stores the PostScript names that were registered with
  the platform text subsystem. It only grows: there is no unregistration.
: `ReadWriteLock` guards the set so that the frequent "already registered?"
  checks run concurrently while inserts are exclusive. A waiting writer blocks
  new readers, so a stream of lookups cannot starve an insert.

The cache performs no I/O and cannot fail. Callers decide when an insert is
warranted (only after the platform accepted the font).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
import threading
from typing import TypeAlias


FontKey: TypeAlias = str


class ReadWriteLock:
    """Shared-read / exclusive-write lock with writer preference."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the lock exclusively for the duration of the block."""
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class RegistrationCache:
    """Thread-safe set of PostScript names known to be registered."""

    def __init__(self, initial: Iterable[FontKey] = ()) -> None:
        self._lock = ReadWriteLock()
        self._registered: set[FontKey] = set(initial)

    def is_registered(self, key: FontKey) -> bool:
        """Return True when ``key`` has been recorded as registered."""
        with self._lock.read():
            return key in self._registered

    def mark_registered(self, key: FontKey) -> None:
        """Record ``key`` as registered."""
        with self._lock.write():
            self._registered.add(key)

    def snapshot(self) -> frozenset[FontKey]:
        """Return an immutable copy of the registered names."""
        with self._lock.read():
            return frozenset(self._registered)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.is_registered(key)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._registered)

    def __repr__(self) -> str:
        return f"RegistrationCache({sorted(self.snapshot())!r})"


__all__ = ["FontKey", "ReadWriteLock", "RegistrationCache"]
