"""
Test doubles and data factories.

This package provides:
- CountingRecordStore: in-memory store that counts calls per method
- RecordingCacheService / FakeClock: cache spy and controllable time source
- seed_* factories that load catalogs, users and sessions synchronously

Usage:
    from tests.fakes import CountingRecordStore, seed_catalogs, seed_user

    store = CountingRecordStore()
    seed_catalogs(store)
    user = seed_user(store, "user-a")
"""
from datetime import date, timedelta
from typing import Optional

from domain.models import User, WorkoutSession
from domain.models.workout_session import utc_today
from infrastructure.db.schema import (
    EXERCISE_TYPES,
    METCON_TYPES,
    MOVEMENT_TYPES,
    USERS,
    WORKOUT_SESSIONS,
)
from tests.fakes.cache_service import FakeClock, RecordingCacheService
from tests.fakes.record_store import CountingRecordStore

# Catalog IDs seeded by seed_catalogs()
BACK_SQUAT = 1
BENCH_PRESS = 2
DEADLIFT = 3
AMRAP = 1
FOR_TIME = 2
PULL_UP = 1
ROW = 2


# =============================================================================
# Factory Functions
# =============================================================================


def seed_catalogs(store) -> None:
    """Load a small set of exercise, metcon and movement types."""
    store.seed(
        EXERCISE_TYPES,
        [
            {"id": BACK_SQUAT, "name": "Back Squat", "category": "Squat", "is_active": True},
            {"id": BENCH_PRESS, "name": "Bench Press", "category": "Press", "is_active": True},
            {"id": DEADLIFT, "name": "Deadlift", "category": "Hinge", "is_active": True},
        ],
    )
    store.seed(
        METCON_TYPES,
        [
            {"id": AMRAP, "name": "AMRAP", "description": "As many rounds as possible", "is_active": True},
            {"id": FOR_TIME, "name": "For Time", "description": None, "is_active": True},
        ],
    )
    store.seed(
        MOVEMENT_TYPES,
        [
            {"id": PULL_UP, "name": "Pull-up", "category": "Gymnastics", "measurement_type": "Reps", "is_active": True},
            {"id": ROW, "name": "Row", "category": "Monostructural", "measurement_type": "Distance", "is_active": True},
        ],
    )


def seed_user(store, user_id: str = "user-a", email: Optional[str] = None) -> User:
    """Insert a user row and return the model."""
    user = User(id=user_id, email=email or f"{user_id}@example.com", name=user_id.title())
    store.seed(USERS, [user.model_dump(mode="json")])
    return user


def seed_session(
    store,
    session_id: str,
    user_id: str = "user-a",
    session_date: Optional[date] = None,
    days_ago: int = 0,
) -> WorkoutSession:
    """Insert a workout session row and return the model."""
    session = WorkoutSession(
        id=session_id,
        user_id=user_id,
        date=session_date or utc_today() - timedelta(days=days_ago),
    )
    store.seed(WORKOUT_SESSIONS, [session.model_dump(mode="json")])
    return session


__all__ = [
    "CountingRecordStore",
    "RecordingCacheService",
    "FakeClock",
    "seed_catalogs",
    "seed_user",
    "seed_session",
    "BACK_SQUAT",
    "BENCH_PRESS",
    "DEADLIFT",
    "AMRAP",
    "FOR_TIME",
    "PULL_UP",
    "ROW",
]
