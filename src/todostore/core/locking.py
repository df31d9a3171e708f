"""
Reader/writer lock guarding the backing store.

Two section kinds:

- ``shared()``    : any number of readers at once; excluded while a writer
  holds the lock.
- ``exclusive()`` : a single writer; excludes readers and other writers.

Writers are preferred: once a writer is waiting, new readers queue behind it,
so a steady stream of ``get_all`` calls cannot starve ``create``.

The lock is not reentrant. A thread holding ``exclusive()`` must not enter
``shared()`` (or vice versa); the service is written so that each operation
takes exactly one section.

Thread safety: all counters are guarded by one ``threading.Condition``.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Writer-preferring shared/exclusive lock for threads."""

    __slots__ = ("_cond", "_readers", "_writer", "_writers_waiting")

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers: int = 0
        self._writer: bool = False
        self._writers_waiting: int = 0

    # ------------------------------- Shared ---------------------------------

    def acquire_shared(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_shared(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_shared() without a matching acquire")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    # ------------------------------ Exclusive -------------------------------

    def acquire_exclusive(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_exclusive(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_exclusive() without a matching acquire")
            self._writer = False
            self._cond.notify_all()

    # ---------------------------- Context helpers ---------------------------

    @contextmanager
    def shared(self) -> Iterator[None]:
        """Hold a shared (read) section for the ``with`` body."""
        self.acquire_shared()
        try:
            yield
        finally:
            self.release_shared()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the exclusive (write) section for the ``with`` body."""
        self.acquire_exclusive()
        try:
            yield
        finally:
            self.release_exclusive()

    # ------------------------------- Introspection --------------------------

    @property
    def readers(self) -> int:  # pragma: no cover - trivial
        return self._readers

    @property
    def write_locked(self) -> bool:  # pragma: no cover - trivial
        return self._writer


__all__ = ["ReadWriteLock"]
