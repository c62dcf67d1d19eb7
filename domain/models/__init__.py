"""
Domain models for the LiftTracker API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, caching).

These models represent the core business concepts:
- User: The account that owns all workout data
- WorkoutSession: One dated training day for a user
- StrengthLift: A strength exercise logged in a session
- MetconWorkout / MetconMovement: A conditioning workout and its movements
- ExerciseType / MetconType / MovementType: Shared reference catalogs

Each workout entity exposes advisory ``is_valid_*`` predicates. They never
raise; repositories turn a failed predicate into a validation error.

Usage:
    >>> from domain.models import StrengthLift

    >>> lift = StrengthLift(
    ...     workout_session_id="s1",
    ...     exercise_type_id=1,
    ...     sets=5,
    ...     reps=5,
    ...     weight=135.25,
    ... )
    >>> lift.is_valid_weight()
    True
"""

from domain.models.catalog import (
    CatalogItem,
    ExerciseType,
    MeasurementType,
    MetconType,
    MovementType,
)
from domain.models.measurements import is_in_range, is_quarter_increment
from domain.models.metcon_workout import MetconMovement, MetconWorkout
from domain.models.strength_lift import StrengthLift
from domain.models.user import User
from domain.models.workout_session import WorkoutSession

__all__ = [
    # Owner
    "User",
    # Workout logging
    "WorkoutSession",
    "StrengthLift",
    "MetconWorkout",
    "MetconMovement",
    # Catalogs
    "CatalogItem",
    "ExerciseType",
    "MetconType",
    "MovementType",
    "MeasurementType",
    # Rules
    "is_quarter_increment",
    "is_in_range",
]
