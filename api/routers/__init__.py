"""
Router package for the LiftTracker API.

This package contains all API routers organized by domain:
- health: Liveness and readiness checks
- auth: Registration / login and token issue
- users: The authenticated user's profile
- workout_sessions: Dated training sessions
- strength_lifts: Strength lifts within sessions
- metcon_workouts: Metcon workouts and their movements
- catalog: Exercise, metcon and movement type catalogs
"""

from api.routers.auth import router as auth_router
from api.routers.catalog import (
    exercise_types_router,
    metcon_types_router,
    movement_types_router,
)
from api.routers.health import router as health_router
from api.routers.metcon_workouts import router as metcon_workouts_router
from api.routers.strength_lifts import router as strength_lifts_router
from api.routers.users import router as users_router
from api.routers.workout_sessions import router as workout_sessions_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "workout_sessions_router",
    "strength_lifts_router",
    "metcon_workouts_router",
    "exercise_types_router",
    "metcon_types_router",
    "movement_types_router",
]
