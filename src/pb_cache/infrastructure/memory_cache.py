"""In-process response cache with per-entry TTL.

One instance per application (held on app.state, never a module global).
A single lock guards the map and the hit/miss counters, so every operation
is atomic with respect to the others. Expiry is lazy: an expired entry is
dropped when it is next read. There is no capacity limit.

Every eviction bumps a generation counter. set_if_generation drops a store
when any eviction ran after the caller read the generation, so a value
loaded before a committed write cannot land after that write's
invalidation.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from src.pb_cache.domain.keys import CacheKey, Resource

logger = logging.getLogger("pb.cache")

# Miss sentinel for get(); a cached value may itself be None.
MISS: Any = object()


@dataclass
class CacheEntry:
    key: CacheKey
    value: Any
    expires_at: float | None  # monotonic seconds; None = until evicted


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    keys: int

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


class ResponseCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._generation = 0

    def get(self, key: CacheKey, default: Any = None) -> Any:
        """Return the stored value, or `default` on miss. Reads never extend the TTL."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.expires_at is not None:
                if self._clock() >= entry.expires_at:
                    del self._entries[key]
                    entry = None
            if entry is None:
                self._misses += 1
                return default
            self._hits += 1
            return entry.value

    def set(self, key: CacheKey, value: Any, ttl_seconds: int | None = 0) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds else None
        with self._lock:
            self._entries[key] = CacheEntry(key=key, value=value, expires_at=expires_at)

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def set_if_generation(
        self, key: CacheKey, value: Any, ttl_seconds: int | None, generation: int
    ) -> bool:
        """Store only if no eviction happened since `generation` was read."""
        expires_at = self._clock() + ttl_seconds if ttl_seconds else None
        with self._lock:
            if self._generation != generation:
                return False
            self._entries[key] = CacheEntry(key=key, value=value, expires_at=expires_at)
            return True

    def delete(self, key: CacheKey) -> bool:
        with self._lock:
            self._generation += 1
            return self._entries.pop(key, None) is not None

    def delete_family(self, resource: Resource, id: str | None = None) -> int:
        """Evict every variant of (resource, id)."""
        with self._lock:
            self._generation += 1
            doomed = [k for k in self._entries if k.family == (resource, id)]
            for k in doomed:
                del self._entries[k]
            return len(doomed)

    def flush_all(self) -> int:
        with self._lock:
            self._generation += 1
            count = len(self._entries)
            self._entries.clear()
        logger.info("Response cache flushed (%d keys)", count)
        return count

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses, keys=len(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
