"""StepAuth Storage - Keyed record storage.

Every piece of per-principal MFA state (configuration, SMS challenges,
pending logins, backup codes) lives behind the same small interface:
- get / put / delete by key
- compare-and-swap for read-modify-write updates
- iteration for maintenance sweeps

The in-memory store is used by default and in tests; a durable keyed
store (a table or keyspace with the principal as primary key) implements
the same interface in production.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

# Configure logging
logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Backing store unavailable or inconsistent."""
    pass


class KeyValueStore(ABC):
    """Abstract keyed record store."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get record by key."""
        pass

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store record, replacing any existing one."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete record. Returns True if a record was removed."""
        pass

    @abstractmethod
    def compare_and_swap(self, key: str, expected: Optional[Any], new: Optional[Any]) -> bool:
        """Replace the record only if it still equals ``expected``.

        ``expected=None`` means the key must be absent, ``new=None``
        deletes the record.
        """
        pass

    @abstractmethod
    def items(self) -> List[Tuple[str, Any]]:
        """Snapshot of all records."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Thread-safe in-memory store.

    Records are expected to be immutable (frozen dataclasses), so handing
    out the stored object never lets a caller mutate shared state.
    """

    def __init__(self):
        """Initialize store."""
        self._records: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[Any]:
        """Get record by key."""
        with self._lock:
            return self._records.get(key)

    def put(self, key: str, value: Any) -> None:
        """Store record."""
        with self._lock:
            self._records[key] = value

    def delete(self, key: str) -> bool:
        """Delete record."""
        with self._lock:
            return self._records.pop(key, None) is not None

    def compare_and_swap(self, key: str, expected: Optional[Any], new: Optional[Any]) -> bool:
        """Atomic conditional replace."""
        with self._lock:
            current = self._records.get(key)
            if current != expected:
                return False

            if new is None:
                self._records.pop(key, None)
            else:
                self._records[key] = new
            return True

    def items(self) -> List[Tuple[str, Any]]:
        """Snapshot of all records."""
        with self._lock:
            return list(self._records.items())

    @property
    def count(self) -> int:
        """Get record count."""
        return len(self._records)


class KeyedLock:
    """One re-entrant lock per key.

    Serializes mutations of a single principal's records while letting
    different principals proceed in parallel.
    """

    def __init__(self):
        """Initialize lock table."""
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, key: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        lock = self._lock_for(key)
        with lock:
            yield


def update_record(
    store: KeyValueStore,
    key: str,
    mutate: Callable[[Optional[Any]], Optional[Any]],
    max_retries: int = 16,
) -> Optional[Any]:
    """Read-modify-write a record with compare-and-swap.

    ``mutate`` receives the current record (or None) and returns the
    replacement (None deletes). Retried while other writers race us.

    Returns:
        The record that was written

    Raises:
        StorageError: If the swap keeps losing
    """
    for _ in range(max_retries):
        current = store.get(key)
        new = mutate(current)
        if new == current:
            return current
        if store.compare_and_swap(key, current, new):
            return new

    raise StorageError(f"Concurrent update of {key!r} did not settle after {max_retries} attempts")


__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "KeyedLock",
    "StorageError",
    "update_record",
]
