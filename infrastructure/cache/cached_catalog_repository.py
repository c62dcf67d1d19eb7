"""
Read-through cache decorator for CatalogRepository.

Catalog rows change rarely, so lookups are cached with the reference-data
TTL. Every write drops the whole catalog group by tag.
"""
import logging
from typing import Generic, List, Optional, TypeVar

from application import cache_keys
from application.ports import CacheService
from application.cache_keys import CacheTTL
from domain.models import CatalogItem
from infrastructure.db.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=CatalogItem)


class CachedCatalogRepository(Generic[C]):
    """CatalogRepository with a read-through cache."""

    def __init__(
        self,
        inner: CatalogRepository[C],
        cache: CacheService,
        ttl: Optional[CacheTTL] = None,
    ):
        self._inner = inner
        self._cache = cache
        self._ttl = ttl or CacheTTL()
        self._table = inner.config.table
        self._tag = cache_keys.catalog_tag(self._table)

    @property
    def label(self) -> str:
        return self._inner.label

    async def _cached(self, key: str, load):
        value = await self._cache.get_or_set(
            key, load, self._ttl.reference_data, tags=[self._tag]
        )
        if isinstance(value, list):
            return [item.model_copy() for item in value]
        return value.model_copy() if value is not None else None

    async def _invalidate(self) -> None:
        removed = await self._cache.remove_by_tag(self._tag)
        logger.debug(f"Invalidated {removed} cached {self._table} entries")

    async def get_by_id(self, item_id: int) -> Optional[C]:
        return await self._cached(
            cache_keys.catalog_by_id(self._table, item_id),
            lambda: self._inner.get_by_id(item_id),
        )

    async def list_active(self) -> List[C]:
        return await self._cached(
            cache_keys.catalog_active(self._table), self._inner.list_active
        )

    async def list_by_category(self, category: str) -> List[C]:
        return await self._cached(
            cache_keys.catalog_by_category(self._table, category),
            lambda: self._inner.list_by_category(category),
        )

    async def list_all(self) -> List[C]:
        return await self._inner.list_all()

    async def exists_by_name(self, name: str, exclude_id: Optional[int] = None) -> bool:
        return await self._inner.exists_by_name(name, exclude_id)

    async def create(self, item: C) -> C:
        created = await self._inner.create(item)
        await self._invalidate()
        return created

    async def update(self, item: C) -> C:
        updated = await self._inner.update(item)
        await self._invalidate()
        return updated

    async def deactivate(self, item_id: int) -> bool:
        removed = await self._inner.deactivate(item_id)
        if removed:
            await self._invalidate()
        return removed
