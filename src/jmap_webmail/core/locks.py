"""Concurrency primitives for jmap-webmail.

This module provides the multiple-reader/single-writer lock guarding
the in-memory session table.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Writer-preferring reader/writer lock.

    Any number of readers may hold the lock at once; a writer holds it
    alone. Once a writer is waiting, new readers queue behind it so a
    steady stream of lookups cannot starve logins and logouts.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        """Block until a shared hold can be taken."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Release a shared hold."""
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Block until an exclusive hold can be taken."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        """Release an exclusive hold."""
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @property
    def readers(self) -> int:
        """Number of shared holds currently taken."""
        return self._readers

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Context manager for a shared hold."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Context manager for an exclusive hold."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
