"""
Domain layer for the LiftTracker API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, caching).
"""

from domain.models import (
    ExerciseType,
    MetconMovement,
    MetconType,
    MetconWorkout,
    MovementType,
    StrengthLift,
    User,
    WorkoutSession,
)

__all__ = [
    "User",
    "WorkoutSession",
    "StrengthLift",
    "MetconWorkout",
    "MetconMovement",
    "ExerciseType",
    "MetconType",
    "MovementType",
]
