from __future__ import annotations

import logging
import re
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from ..core.constants import DEFAULT_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry:
    value: Any
    stored_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl


@dataclass(frozen=True)
class CacheStats:
    size: int
    hits: int
    misses: int
    hit_rate: float


class CacheStore:
    """In-process key/value cache with per-entry TTL and regex invalidation.

    Single-process and best-effort: it is an optimization layer, never the
    system of record. Expired entries are purged lazily when they are read.
    Every public operation runs under one lock so threaded servers cannot
    interleave half-finished mutations.
    """

    def __init__(
        self,
        *,
        default_ttl: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if default_ttl < 0:
            raise ValueError("default_ttl must not be negative")
        self._default_ttl = float(default_ttl)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = self._default_ttl if ttl is None else float(ttl)
        with self._lock:
            self._entries[key] = CacheEntry(value=value, stored_at=self._clock(), ttl=ttl)

    def get(self, key: str) -> Any:
        """Return the cached value, or None on a miss (absent or expired)."""
        found, value = self._lookup(key)
        return value if found else None

    def _lookup(self, key: str) -> tuple[bool, Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                logger.debug("cache miss: %s", key)
                return False, None

            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._misses += 1
                logger.debug("cache expired: %s", key)
                return False, None

            self._hits += 1
            logger.debug("cache hit: %s", key)
            return True, entry.value

    def get_or_set(self, key: str, loader: Callable[[], T], ttl: Optional[float] = None) -> T:
        """Read-through helper: return the cached value or compute and store it.

        A stored None counts as a hit and is returned as is. The loader runs
        outside the lock; if it raises, nothing is cached.
        """

        found, cached = self._lookup(key)
        if found:
            return cached

        value = loader()
        self.set(key, value, ttl)
        return value

    def invalidate(self, pattern: str) -> int:
        """Drop every entry whose key matches ``pattern`` (re.search semantics)."""
        regex = re.compile(pattern)
        with self._lock:
            doomed = [key for key in self._entries if regex.search(key)]
            for key in doomed:
                del self._entries[key]
        if doomed:
            logger.debug("cache invalidated %d entries for %r", len(doomed), pattern)
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._hits = 0
            self._misses = 0
        logger.info("cache cleared (%d entries)", count)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> CacheStats:
        with self._lock:
            total = self._hits + self._misses
            return CacheStats(
                size=len(self._entries),
                hits=self._hits,
                misses=self._misses,
                hit_rate=self._hits / total if total else 0.0,
            )
