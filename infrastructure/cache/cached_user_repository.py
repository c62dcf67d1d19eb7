"""
Read-through cache decorator for UserRepository.

Implements the same interface as the repository it wraps, so callers cannot
tell the two apart. Reads check the cache first and populate it on a miss;
every write delegates first and then invalidates every key a later read
could see as stale: the id key, the email key, the old email key when the
address changed, and the owner's tag group.

A read racing between a write and its invalidation can still observe the
old value for that window; there is no locking.
"""
import logging
from typing import Optional

from application import cache_keys
from application.ports import CacheService, UserRepository
from application.cache_keys import CacheTTL
from domain.models import User

logger = logging.getLogger(__name__)


class CachedUserRepository:
    """
    UserRepository with a read-through cache.

    Cached values are copies; callers mutating a returned user never touch
    the cached entry.

    Usage:
        users = CachedUserRepository(UserRepository(store), cache)
        await users.get_by_email("Lifter@Example.com")  # miss, store read
        await users.get_by_email("lifter@example.com")  # hit
    """

    def __init__(
        self,
        inner: UserRepository,
        cache: CacheService,
        ttl: Optional[CacheTTL] = None,
    ):
        self._inner = inner
        self._cache = cache
        self._ttl = ttl or CacheTTL()

    async def _read_through(self, key: str, load) -> Optional[User]:
        cached = await self._cache.get(key)
        if cached is not None:
            return cached.model_copy(deep=True)
        user = await load()
        if user is not None:
            await self._cache.set(
                key,
                user.model_copy(deep=True),
                self._ttl.user_data,
                tags=[cache_keys.owner_tag(user.id)],
            )
        return user

    async def _invalidate(self, user: User, old_email: Optional[str] = None) -> None:
        await self._cache.remove(cache_keys.user_by_id(user.id))
        await self._cache.remove(cache_keys.user_by_email(user.email))
        if old_email and old_email.lower() != user.email.lower():
            await self._cache.remove(cache_keys.user_by_email(old_email))
        await self._cache.remove_by_tag(cache_keys.owner_tag(user.id))
        logger.debug(f"Invalidated cache for user {user.id}")

    # -------------------------------------------------------------------------
    # UserRepository
    # -------------------------------------------------------------------------

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return await self._read_through(
            cache_keys.user_by_id(user_id),
            lambda: self._inner.get_by_id(user_id),
        )

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._read_through(
            cache_keys.user_by_email(email),
            lambda: self._inner.get_by_email(email),
        )

    async def exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def create(self, user: User) -> User:
        created = await self._inner.create(user)
        await self._invalidate(created)
        return created

    async def update(self, user: User) -> User:
        previous = await self._inner.get_by_id(user.id)
        updated = await self._inner.update(user)
        await self._invalidate(updated, old_email=previous.email if previous else None)
        return updated

    async def delete(self, user_id: str) -> bool:
        existing = await self._inner.get_by_id(user_id)
        deleted = await self._inner.delete(user_id)
        if deleted and existing is not None:
            await self._invalidate(existing)
        return deleted
