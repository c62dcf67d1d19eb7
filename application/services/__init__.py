"""
Application services for the LiftTracker API.

Services coordinate repositories and the cache for one area each and are
constructed per request by the providers in api.deps.

Usage:
    from application.services import StrengthLiftService

    service = StrengthLiftService(lifts=StrengthLiftRepository(store))
    lift = await service.create_lift(user_id, StrengthLift(...))
"""

from application.services.catalog_service import CatalogService
from application.services.user_service import UserService
from application.services.workout_entry_services import (
    MetconWorkoutService,
    StrengthLiftService,
)
from application.services.workout_session_service import (
    WorkoutSessionService,
    check_date_range,
)

__all__ = [
    "UserService",
    "WorkoutSessionService",
    "StrengthLiftService",
    "MetconWorkoutService",
    "CatalogService",
    "check_date_range",
]
