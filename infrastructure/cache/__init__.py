"""
Infrastructure Cache Layer.

- MemoryCacheService: in-process TTL cache with tag and pattern invalidation
- CachedUserRepository / CachedCatalogRepository: read-through decorators
  that keep the wrapped repository's interface
- CacheTTL: TTL classes (re-exported from application.cache_keys)
"""

from application.cache_keys import CacheTTL
from infrastructure.cache.memory_cache import MemoryCacheService
from infrastructure.cache.cached_user_repository import CachedUserRepository
from infrastructure.cache.cached_catalog_repository import CachedCatalogRepository

__all__ = [
    "CacheTTL",
    "MemoryCacheService",
    "CachedUserRepository",
    "CachedCatalogRepository",
]
