"""
In-process implementation of CacheService.

Entries are kept in a dict with an absolute expiry. When the cache is full,
expired entries are purged first and then the oldest fraction of entries
(``compaction_percentage``) is evicted.

Two indexes sit beside the entries:
- the entry dict itself is the key index scanned by remove_by_pattern()
- a tag -> keys index serves remove_by_tag()

The instance is created once in the application factory, shared through
``app.state`` and cleared on shutdown. There is no cross-process
invalidation; each server process has its own cache.
"""
import logging
import re
import threading
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, FrozenSet, Iterable, Optional, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ENTRIES = 1000
DEFAULT_COMPACTION_PERCENTAGE = 0.1


@dataclass
class _CacheEntry:
    value: Any
    created_at: float
    expires_at: float
    tags: FrozenSet[str]


class MemoryCacheService:
    """
    TTL cache with tag and pattern invalidation.

    Usage:
        cache = MemoryCacheService(max_entries=1000)
        await cache.set("user:id:42", user, ttl_seconds=1800, tags=["owner:42"])
        await cache.remove_by_tag("owner:42")
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        compaction_percentage: float = DEFAULT_COMPACTION_PERCENTAGE,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            max_entries: Entry count that triggers compaction
            compaction_percentage: Fraction of entries evicted when full
            clock: Monotonic time source (seconds)
        """
        self._max_entries = max_entries
        self._compaction_percentage = compaction_percentage
        self._clock = clock
        self._entries: Dict[str, _CacheEntry] = {}
        self._tags: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    # =========================================================================
    # Internal helpers (call with the lock held)
    # =========================================================================

    def _drop(self, key: str) -> bool:
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        for tag in entry.tags:
            keys = self._tags.get(tag)
            if keys is not None:
                keys.discard(key)
                if not keys:
                    del self._tags[tag]
        return True

    def _compact(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.expires_at <= now]:
            self._drop(key)
        if len(self._entries) < self._max_entries:
            return
        count = max(1, int(self._max_entries * self._compaction_percentage))
        oldest = sorted(self._entries.items(), key=lambda item: item[1].created_at)
        for key, _ in oldest[:count]:
            self._drop(key)
        self._evictions += count
        logger.info(f"Cache full, evicted {count} oldest entries")

    # =========================================================================
    # CacheService
    # =========================================================================

    async def get(self, key: str) -> Optional[Any]:
        try:
            with self._lock:
                entry = self._entries.get(key)
                if entry is None:
                    self._misses += 1
                    logger.debug(f"Cache miss: {key}")
                    return None
                if entry.expires_at <= self._clock():
                    self._drop(key)
                    self._misses += 1
                    logger.debug(f"Cache expired: {key}")
                    return None
                self._hits += 1
                logger.debug(f"Cache hit: {key}")
                return entry.value
        except Exception as e:
            logger.warning(f"Cache read failed for {key}, treating as miss: {e}")
            return None

    async def set(
        self,
        key: str,
        value: Any,
        ttl_seconds: float,
        *,
        tags: Iterable[str] = (),
    ) -> None:
        try:
            with self._lock:
                self._drop(key)
                if len(self._entries) >= self._max_entries:
                    self._compact()
                now = self._clock()
                entry = _CacheEntry(
                    value=value,
                    created_at=now,
                    expires_at=now + ttl_seconds,
                    tags=frozenset(tags),
                )
                self._entries[key] = entry
                for tag in entry.tags:
                    self._tags.setdefault(tag, set()).add(key)
            logger.debug(f"Cache set: {key} (ttl={ttl_seconds}s)")
        except Exception as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    async def remove(self, key: str) -> None:
        try:
            with self._lock:
                self._drop(key)
        except Exception as e:
            logger.warning(f"Cache remove failed for {key}: {e}")

    async def remove_by_pattern(self, pattern: str) -> int:
        try:
            regex = re.compile(pattern, re.IGNORECASE)
            with self._lock:
                matched = [key for key in self._entries if regex.search(key)]
                for key in matched:
                    self._drop(key)
        except Exception as e:
            logger.warning(f"Cache pattern removal failed for {pattern!r}: {e}")
            return 0
        logger.debug(f"Removed {len(matched)} cache entries matching {pattern!r}")
        return len(matched)

    async def remove_by_tag(self, tag: str) -> int:
        try:
            with self._lock:
                keys = list(self._tags.get(tag, ()))
                for key in keys:
                    self._drop(key)
        except Exception as e:
            logger.warning(f"Cache tag removal failed for {tag}: {e}")
            return 0
        logger.debug(f"Removed {len(keys)} cache entries tagged {tag}")
        return len(keys)

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[Optional[T]]],
        ttl_seconds: float,
        *,
        tags: Iterable[str] = (),
    ) -> Optional[T]:
        cached = await self.get(key)
        if cached is not None:
            return cached
        value = await factory()
        if value is not None:
            await self.set(key, value, ttl_seconds, tags=tags)
        return value

    # =========================================================================
    # Lifecycle and diagnostics
    # =========================================================================

    def clear(self) -> None:
        """Drop every entry (called on application shutdown)."""
        with self._lock:
            self._entries.clear()
            self._tags.clear()

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "tags": len(self._tags),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
