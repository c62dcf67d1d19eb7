"""
Infrastructure Database Layer.

This package provides the record stores (Supabase and in-memory) and the
store-backed repositories implementing the interfaces in application.ports.

Usage:
    from supabase import acreate_client
    from infrastructure.db import (
        SupabaseRecordStore,
        UserRepository,
        WorkoutSessionRepository,
        StrengthLiftRepository,
        CatalogRepository,
        EXERCISE_TYPE_CATALOG,
    )

    # Create the async Supabase client once at startup
    client = await acreate_client(SUPABASE_URL, SUPABASE_KEY)
    store = SupabaseRecordStore(client)

    # Instantiate repositories with the injected store
    users = UserRepository(store)
    sessions = WorkoutSessionRepository(store)
    lifts = StrengthLiftRepository(store)
    exercise_types = CatalogRepository(store, EXERCISE_TYPE_CATALOG)
"""

from infrastructure.db.catalog_repository import (
    EXERCISE_TYPE_CATALOG,
    METCON_TYPE_CATALOG,
    MOVEMENT_TYPE_CATALOG,
    CatalogConfig,
    CatalogRepository,
)
from infrastructure.db.entity_repository import (
    EntityConfig,
    EntityRepository,
    FieldRule,
    Reference,
)
from infrastructure.db.memory_store import InMemoryRecordStore
from infrastructure.db.metcon_workout_repository import MetconWorkoutRepository
from infrastructure.db.strength_lift_repository import StrengthLiftRepository
from infrastructure.db.supabase_store import SupabaseRecordStore
from infrastructure.db.user_repository import UserRepository
from infrastructure.db.workout_session_repository import WorkoutSessionRepository

__all__ = [
    # Stores
    "SupabaseRecordStore",
    "InMemoryRecordStore",

    # Generic repository
    "EntityRepository",
    "EntityConfig",
    "FieldRule",
    "Reference",

    # Entity repositories
    "UserRepository",
    "WorkoutSessionRepository",
    "StrengthLiftRepository",
    "MetconWorkoutRepository",

    # Catalogs
    "CatalogRepository",
    "CatalogConfig",
    "EXERCISE_TYPE_CATALOG",
    "METCON_TYPE_CATALOG",
    "MOVEMENT_TYPE_CATALOG",
]
