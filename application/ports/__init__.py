"""
Repository Interfaces (Ports) for the LiftTracker API.

This package defines abstract interfaces that decouple application logic
from infrastructure (database, cache). Implementations are provided in the
infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the application needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import StrengthLiftRepository

    class StrengthLiftService:
        def __init__(self, lifts: StrengthLiftRepository):
            self._lifts = lifts

        async def log_lift(self, owner_id, lift):
            return await self._lifts.create(lift, owner_id=owner_id)
"""

# Durable store
from application.ports.record_store import RecordId, RecordStore, Row

# Cache
from application.ports.cache_service import CacheService

# Users
from application.ports.user_repository import UserRepository

# Workout logging
from application.ports.workout_repositories import (
    MetconWorkoutRepository,
    SessionEntryRepository,
    StrengthLiftRepository,
    WorkoutSessionRepository,
)

# Reference catalogs
from application.ports.catalog_repository import CatalogRepository

__all__ = [
    # Store
    "RecordStore",
    "RecordId",
    "Row",
    # Cache
    "CacheService",
    # Users
    "UserRepository",
    # Workout logging
    "WorkoutSessionRepository",
    "SessionEntryRepository",
    "StrengthLiftRepository",
    "MetconWorkoutRepository",
    # Catalogs
    "CatalogRepository",
]
