"""Bounded, thread-safe memoization cache used by the move finder.

Keys are compared by value (they must be hashable), never by identity.  When the
cache is full, the least recently used entry is evicted.

Concurrent first-time requests for the same key are collapsed: the first caller
computes the value while the others wait on a shared `Future` and receive the same
result (or the same exception).  Failed computations are not cached.
"""

import threading
from collections import OrderedDict
from collections.abc import Callable, Hashable
from concurrent.futures import Future
from typing import Generic, NamedTuple, TypeVar

from letterpress.solver.config import config as solver_config

V = TypeVar("V")


class CacheInfo(NamedTuple):
    """Statistics for a single cache."""

    hits: int
    misses: int
    maxsize: int
    currsize: int


class LRUCache(Generic[V]):
    """Least-recently-used key -> value store with single-flight computation."""

    def __init__(self, maxsize: int | None = None) -> None:
        """Create an empty cache.

        Args:
            maxsize (int | None): Maximum number of entries.  If None (default), uses
                the configured `cache_size`.
        """
        if maxsize is None:
            maxsize = solver_config.cache_size
        if maxsize <= 0:
            raise ValueError(f"Cache size must be positive, got {maxsize}.")
        self.maxsize = maxsize
        self._data: OrderedDict[Hashable, V] = OrderedDict()
        self._pending: dict[Hashable, Future[V]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

    def get_or_compute(self, key: Hashable, compute: Callable[[], V]) -> V:
        """Return the value cached under `key`, computing it with `compute()` if absent."""
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
                self._hits += 1
                return self._data[key]
            future = self._pending.get(key)
            if future is not None:
                # Another thread is computing this key; share its result
                self._hits += 1
                owner = False
            else:
                future = Future()
                self._pending[key] = future
                self._misses += 1
                owner = True

        if not owner:
            return future.result()

        try:
            value = compute()
        except BaseException as e:
            with self._lock:
                del self._pending[key]
            future.set_exception(e)
            raise

        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self.maxsize:
                self._data.popitem(last=False)
            del self._pending[key]
        future.set_result(value)
        return value

    def cache_info(self) -> CacheInfo:
        """Return hit/miss statistics and the current size."""
        with self._lock:
            return CacheInfo(self._hits, self._misses, self.maxsize, len(self._data))

    def clear(self) -> None:
        """Remove all cached entries and reset the statistics."""
        with self._lock:
            self._data.clear()
            self._hits = 0
            self._misses = 0
