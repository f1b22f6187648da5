"""A small thread-safe key/value cache."""

from __future__ import annotations

import threading
from typing import Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Cache(Generic[K, V]):
    """A dictionary guarded by a lock so it can be shared between threads."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: dict[K, V] = {}

    def get(self, key: K, default: V | None = None) -> V | None:
        """Return the value stored under ``key``, or ``default`` if absent."""
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: K, value: V) -> None:
        """Store ``value`` under ``key``."""
        with self._lock:
            self._data[key] = value

    def delete(self, key: K) -> None:
        """Remove ``key``; removing a missing key is not an error."""
        with self._lock:
            self._data.pop(key, None)

    def size(self) -> int:
        """Return the number of stored entries."""
        with self._lock:
            return len(self._data)

    def keys(self) -> list[K]:
        """Return a snapshot of all keys."""
        with self._lock:
            return list(self._data)

    def values(self) -> list[V]:
        """Return a snapshot of all values."""
        with self._lock:
            return list(self._data.values())

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        return self.size()