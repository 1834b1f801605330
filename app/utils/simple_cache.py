"""In-memory TTL cache used to avoid repeated classifier calls.

Thread-safe with LRU eviction; small enough to swap for Redis later while
keeping the same interface.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from hashlib import sha256
from typing import Callable

from app.schemas.dream import AnalysisResult, TranslationResult

logger = logging.getLogger(__name__)


CachedValue = AnalysisResult | TranslationResult


@dataclass
class CacheItem:
    value: CachedValue
    expires_at: float


class SimpleTTLCache:
    """Thread-safe, in-memory TTL cache with LRU eviction.

    Attributes:
        ttl_seconds: Time-to-live applied to all entries.
        max_entries: Maximum number of cached items (None for unlimited).
    """

    def __init__(
        self,
        ttl_seconds: int = 3600,
        max_entries: int | None = 1024,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._store: OrderedDict[str, CacheItem] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"SimpleTTLCache(ttl_seconds={self._ttl}, max_entries={self._max_entries}, "
            f"size={len(self._store)}, hits={self._hits}, misses={self._misses}, "
            f"evictions={self._evictions})"
        )

    def get(self, key: str) -> CachedValue | None:
        """Return the cached value, or None if missing or expired."""

        with self._lock:
            item = self._store.get(key)
            if item is None:
                self._misses += 1
                logger.debug("cache.miss", extra={"cache_key": key[:16], "reason": "not_found"})
                return None

            if self._clock() > item.expires_at:
                self._evict_single(key)
                self._misses += 1
                logger.debug("cache.miss", extra={"cache_key": key[:16], "reason": "expired"})
                return None

            self._hits += 1
            self._store.move_to_end(key)
            logger.debug("cache.hit", extra={"cache_key": key[:16]})
            return item.value

    def set(self, key: str, value: CachedValue) -> None:
        """Store a value with TTL, evicting expired and least-recently-used entries."""

        with self._lock:
            self._evict_expired_locked()
            self._store[key] = CacheItem(value=value, expires_at=self._clock() + self._ttl)
            self._store.move_to_end(key)
            self._evict_if_over_capacity_locked()

            logger.debug(
                "cache.set",
                extra={"cache_key": key[:16], "size": len(self._store), "ttl_s": self._ttl},
            )

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def stats(self) -> dict[str, int | None]:
        """Return lightweight cache metrics without exposing values."""

        with self._lock:
            return {
                "ttl_seconds": self._ttl,
                "max_entries": self._max_entries,
                "entries": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def _evict_single(self, key: str) -> None:
        if self._store.pop(key, None) is not None:
            self._evictions += 1

    def _evict_expired_locked(self) -> None:
        now = self._clock()
        for key in [k for k, item in self._store.items() if item.expires_at <= now]:
            self._evict_single(key)

    def _evict_if_over_capacity_locked(self) -> None:
        if self._max_entries is None:
            return
        while len(self._store) > self._max_entries:
            self._store.popitem(last=False)
            self._evictions += 1


def build_cache_key(*parts: str, salt: str | None = None) -> str:
    """Build a stable SHA-256 cache key from text parts.

    Args:
        parts: Inputs that determine the cached value (e.g. dream text, language).
        salt: Optional namespace such as the provider name.

    Returns:
        Hex-encoded digest.
    """

    hasher = sha256()
    if salt:
        hasher.update(salt.encode())
        hasher.update(b"\x00")
    for part in parts:
        hasher.update(part.encode("utf-8", errors="ignore"))
        hasher.update(b"\x00")
    return hasher.hexdigest()
