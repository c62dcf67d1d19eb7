"""
Cache Service Interface (Port).

Key-value cache with per-entry TTL, tag-based group invalidation and
pattern-based bulk removal. The cache is an optimisation only: a failed
read behaves as a miss and never fails the request.
"""
from typing import Any, Awaitable, Callable, Iterable, Optional, Protocol, TypeVar

T = TypeVar("T")


class CacheService(Protocol):
    """
    Abstract interface for the application cache.

    A single instance is created at application startup and injected into
    the repositories and services that use it.
    """

    async def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.

        Returns:
            The value, or None when absent, expired or unreadable
        """
        ...

    async def set(
        self,
        key: str,
        value: Any,
        ttl_seconds: float,
        *,
        tags: Iterable[str] = (),
    ) -> None:
        """
        Store a value, replacing any existing entry.

        Args:
            key: Cache key
            value: Value to store
            ttl_seconds: Time to live
            tags: Group tags used by remove_by_tag()
        """
        ...

    async def remove(self, key: str) -> None:
        """Remove one entry. No-op when absent."""
        ...

    async def remove_by_pattern(self, pattern: str) -> int:
        """
        Remove every tracked key matching a case-insensitive regex.

        Returns:
            Number of entries removed
        """
        ...

    async def remove_by_tag(self, tag: str) -> int:
        """
        Remove every entry stored under a tag.

        Returns:
            Number of entries removed
        """
        ...

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[Optional[T]]],
        ttl_seconds: float,
        *,
        tags: Iterable[str] = (),
    ) -> Optional[T]:
        """
        Return the cached value or compute, store and return it.

        None results from the factory are returned but not stored.
        Errors raised by the factory propagate.
        """
        ...
