"""Per-operation caches of values that expire."""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Hashable, Iterator, Optional, Tuple

from .expires import DataExpires


class CacheUnit:
    """A thread-safe mapping whose entries drop out once expired."""

    def __init__(self) -> None:
        self._entries: Dict[Hashable, DataExpires] = {}
        self._key_locks: Dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    def delete(self, key: Hashable) -> None:
        """Remove an entry and its key lock."""
        with self._guard:
            self._entries.pop(key, None)
            self._key_locks.pop(key, None)

    def load(self, key: Hashable) -> Optional[DataExpires]:
        """Return the live entry for key, or None if absent or expired."""
        with self._guard:
            value = self._entries.get(key)
            if value is None:
                return None
            if value.is_expired():
                del self._entries[key]
                return None
            return value

    def load_or_store(
        self, key: Hashable, value: DataExpires
    ) -> Tuple[Optional[DataExpires], bool]:
        """Return (existing, True) or store value and return (value, False).

        If the resulting entry is already expired it is dropped and
        (None, False) is returned.
        """
        with self._guard:
            loaded = key in self._entries
            actual = self._entries.setdefault(key, value)
            if actual.is_expired():
                del self._entries[key]
                return None, False
            return actual, loaded

    def store(self, key: Hashable, value: DataExpires) -> None:
        """Store value unless it is already expired."""
        if value.is_expired():
            return
        with self._guard:
            self._entries[key] = value

    def items(self) -> Iterator[Tuple[Hashable, DataExpires]]:
        """Yield live (key, value) pairs, dropping expired ones on the way."""
        with self._guard:
            snapshot = list(self._entries.items())
        for key, value in snapshot:
            if value.is_expired():
                with self._guard:
                    if self._entries.get(key) is value:
                        del self._entries[key]
                continue
            yield key, value

    def key_lock(self, key: Hashable) -> threading.Lock:
        """Return the lock that serialises work on key; use it with ``with``."""
        with self._guard:
            return self._key_locks.setdefault(key, threading.Lock())


class CacheOpMap:
    """Cache units keyed by operation name."""

    def __init__(self) -> None:
        self._units: Dict[str, CacheUnit] = {}
        self._guard = threading.Lock()

    def unit(self, op: str) -> CacheUnit:
        """Return the cache unit for op, creating it on first use."""
        with self._guard:
            return self._units.setdefault(op, CacheUnit())

    def remove(self, op: str) -> None:
        """Drop the whole cache unit for op."""
        with self._guard:
            self._units.pop(op, None)

    def clear_invalidated(self) -> None:
        """Remove every expired entry from every unit."""
        with self._guard:
            units = list(self._units.values())
        for cache in units:
            for _ in cache.items():
                pass

    def cache_operation(
        self, op: str, key: Hashable, op_func: Callable[[], Optional[DataExpires]]
    ) -> Optional[DataExpires]:
        """Return the cached entry for key, computing it with op_func if needed.

        Only one caller at a time computes a given key. A None result is not
        stored; exceptions from op_func propagate and nothing is stored.
        """
        cache = self.unit(op)
        with cache.key_lock(key):
            data = cache.load(key)
            if data is None:
                data = op_func()
                if data is not None:
                    cache.store(key, data)
            return data


GLOBAL_CACHE_OP_MAP = CacheOpMap()