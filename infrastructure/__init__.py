"""
Infrastructure Layer for the LiftTracker API.

This package contains concrete implementations of the application ports:
- db/: Record stores (Supabase, in-memory) and store-backed repositories
- cache/: In-memory TTL cache and cache-decorating repositories
"""

# Re-export for convenient access
from infrastructure.cache import (
    CachedCatalogRepository,
    CachedUserRepository,
    CacheTTL,
    MemoryCacheService,
)
from infrastructure.db import (
    CatalogRepository,
    InMemoryRecordStore,
    MetconWorkoutRepository,
    StrengthLiftRepository,
    SupabaseRecordStore,
    UserRepository,
    WorkoutSessionRepository,
)

__all__ = [
    # Stores
    "SupabaseRecordStore",
    "InMemoryRecordStore",
    # Repositories
    "UserRepository",
    "WorkoutSessionRepository",
    "StrengthLiftRepository",
    "MetconWorkoutRepository",
    "CatalogRepository",
    # Cache
    "MemoryCacheService",
    "CacheTTL",
    "CachedUserRepository",
    "CachedCatalogRepository",
]
