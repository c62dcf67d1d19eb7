"""
FastAPI Dependency Providers for the LiftTracker API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake
implementations.

Architecture:
- Settings are cached per-process (lru_cache)
- The record store and the cache are created once by the app factory and
  live on ``app.state``
- Repository and service providers create new instances per-request
- The user repository is wrapped in the read-through cache

Usage in routers:
    from api.deps import get_strength_lift_service, get_current_user

    @router.get("/strength-lifts/{lift_id}")
    async def get_lift(
        lift_id: str,
        user_id: str = Depends(get_current_user),
        service: StrengthLiftService = Depends(get_strength_lift_service),
    ):
        return await service.get_lift(user_id, lift_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_record_store] = lambda: InMemoryRecordStore()
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

# Protocol types (interfaces)
from application.ports import (
    CacheService,
    CatalogRepository,
    MetconWorkoutRepository,
    RecordStore,
    StrengthLiftRepository,
    UserRepository,
    WorkoutSessionRepository,
)
from application.cache_keys import CacheTTL
from application.services import (
    CatalogService,
    MetconWorkoutService,
    StrengthLiftService,
    UserService,
    WorkoutSessionService,
)

# Concrete implementations
from infrastructure.cache import CachedCatalogRepository, CachedUserRepository
from infrastructure.db import (
    EXERCISE_TYPE_CATALOG,
    METCON_TYPE_CATALOG,
    MOVEMENT_TYPE_CATALOG,
    CatalogRepository as StoreCatalogRepository,
    MetconWorkoutRepository as StoreMetconWorkoutRepository,
    StrengthLiftRepository as StoreStrengthLiftRepository,
    UserRepository as StoreUserRepository,
    WorkoutSessionRepository as StoreWorkoutSessionRepository,
)

from backend.settings import Settings, get_settings as _get_settings

# Auth from existing module (wrap to maintain single source of truth)
from backend.auth import get_current_user as _get_current_user
from backend.auth import require_admin as _require_admin


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


def get_cache_ttl(settings: Settings = Depends(get_settings)) -> CacheTTL:
    """Get the configured cache TTL classes."""
    return CacheTTL.from_settings(settings)


# =============================================================================
# Store and Cache Providers
# =============================================================================


def get_record_store(request: Request) -> RecordStore:
    """
    Get the record store created at startup.

    Raises:
        HTTPException: 503 if no database is configured
    """
    store = getattr(request.app.state, "record_store", None)
    if store is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return store


def get_cache_service(request: Request) -> CacheService:
    """
    Get the process-wide cache created by the app factory.

    Raises:
        HTTPException: 503 if the app was built without a cache
    """
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        raise HTTPException(status_code=503, detail="Cache not initialized")
    return cache


# =============================================================================
# Repository Providers
# =============================================================================


def get_user_repo(
    store: RecordStore = Depends(get_record_store),
    cache: CacheService = Depends(get_cache_service),
    ttl: CacheTTL = Depends(get_cache_ttl),
) -> UserRepository:
    """
    Get UserRepository implementation.

    Returns the store-backed repository wrapped in the read-through cache.
    """
    return CachedUserRepository(StoreUserRepository(store), cache, ttl)


def get_session_repo(
    store: RecordStore = Depends(get_record_store),
) -> WorkoutSessionRepository:
    return StoreWorkoutSessionRepository(store)


def get_strength_lift_repo(
    store: RecordStore = Depends(get_record_store),
) -> StrengthLiftRepository:
    return StoreStrengthLiftRepository(store)


def get_metcon_workout_repo(
    store: RecordStore = Depends(get_record_store),
) -> MetconWorkoutRepository:
    return StoreMetconWorkoutRepository(store)


def get_exercise_type_repo(
    store: RecordStore = Depends(get_record_store),
    cache: CacheService = Depends(get_cache_service),
    ttl: CacheTTL = Depends(get_cache_ttl),
) -> CatalogRepository:
    return CachedCatalogRepository(
        StoreCatalogRepository(store, EXERCISE_TYPE_CATALOG), cache, ttl
    )


def get_metcon_type_repo(
    store: RecordStore = Depends(get_record_store),
    cache: CacheService = Depends(get_cache_service),
    ttl: CacheTTL = Depends(get_cache_ttl),
) -> CatalogRepository:
    return CachedCatalogRepository(
        StoreCatalogRepository(store, METCON_TYPE_CATALOG), cache, ttl
    )


def get_movement_type_repo(
    store: RecordStore = Depends(get_record_store),
    cache: CacheService = Depends(get_cache_service),
    ttl: CacheTTL = Depends(get_cache_ttl),
) -> CatalogRepository:
    return CachedCatalogRepository(
        StoreCatalogRepository(store, MOVEMENT_TYPE_CATALOG), cache, ttl
    )


# =============================================================================
# Service Providers
# =============================================================================


def get_user_service(users: UserRepository = Depends(get_user_repo)) -> UserService:
    return UserService(users)


def get_session_service(
    sessions: WorkoutSessionRepository = Depends(get_session_repo),
    cache: CacheService = Depends(get_cache_service),
    ttl: CacheTTL = Depends(get_cache_ttl),
) -> WorkoutSessionService:
    return WorkoutSessionService(sessions, cache, ttl)


def get_strength_lift_service(
    lifts: StrengthLiftRepository = Depends(get_strength_lift_repo),
) -> StrengthLiftService:
    return StrengthLiftService(lifts)


def get_metcon_workout_service(
    workouts: MetconWorkoutRepository = Depends(get_metcon_workout_repo),
) -> MetconWorkoutService:
    return MetconWorkoutService(workouts)


def get_exercise_type_service(
    catalog: CatalogRepository = Depends(get_exercise_type_repo),
) -> CatalogService:
    return CatalogService(catalog, "Exercise type")


def get_metcon_type_service(
    catalog: CatalogRepository = Depends(get_metcon_type_repo),
) -> CatalogService:
    return CatalogService(catalog, "Metcon type")


def get_movement_type_service(
    catalog: CatalogRepository = Depends(get_movement_type_repo),
) -> CatalogService:
    return CatalogService(catalog, "Movement type")


# =============================================================================
# Auth Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Get the authenticated user's ID.

    Wraps backend.auth.get_current_user so tests can override either this
    provider or get_settings.

    Raises:
        HTTPException: 401 if the bearer token is missing or invalid
    """
    return await _get_current_user(authorization, settings)


async def require_admin(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Get the authenticated admin's ID.

    Raises:
        HTTPException: 401 without a valid token, 403 if the caller is not an admin
    """
    return await _require_admin(authorization, settings)


__all__ = [
    # Settings
    "get_settings",
    "get_cache_ttl",
    # Store and cache
    "get_record_store",
    "get_cache_service",
    # Repositories
    "get_user_repo",
    "get_session_repo",
    "get_strength_lift_repo",
    "get_metcon_workout_repo",
    "get_exercise_type_repo",
    "get_metcon_type_repo",
    "get_movement_type_repo",
    # Services
    "get_user_service",
    "get_session_service",
    "get_strength_lift_service",
    "get_metcon_workout_service",
    "get_exercise_type_service",
    "get_metcon_type_service",
    "get_movement_type_service",
    # Auth
    "get_current_user",
    "require_admin",
]
