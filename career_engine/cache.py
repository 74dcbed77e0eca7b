"""
TTL Cache

Explicit, injected cache for values that are expensive to recompute
(currently enriched pathway plans). Owned by the calling layer and passed
in; nothing in the matching core holds hidden cache state.

Storage, expiry and LRU eviction come from ``cachetools.TTLCache``. This
wrapper adds the lock (cachetools caches are not thread-safe) and hit/miss
counters.
"""

import threading
import time
from typing import Any, Callable, Hashable, Optional

import cachetools


class TTLCache:
    def __init__(
        self,
        ttl_seconds: float = 3600.0,
        maxsize: int = 512,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if maxsize <= 0:
            raise ValueError("maxsize must be positive")
        self.ttl_seconds = ttl_seconds
        self.maxsize = maxsize
        self._entries = cachetools.TTLCache(maxsize=maxsize, ttl=ttl_seconds, timer=clock)
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable, default: Optional[Any] = None) -> Any:
        with self._lock:
            try:
                value = self._entries[key]
            except KeyError:
                self.misses += 1
                return default
            self.hits += 1
            return value

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._entries[key] = value

    def clear(self) -> None:
        """Drop every entry and reset the hit/miss counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)
