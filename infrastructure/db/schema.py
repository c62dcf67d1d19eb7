"""
Table names and foreign-key cascades for the LiftTracker store.

Ownership chain: users -> workout_sessions -> {strength_lifts,
metcon_workouts -> metcon_movements}. Deleting a parent removes its
children through CASCADES.
"""

from typing import Dict, Tuple

USERS = "users"
WORKOUT_SESSIONS = "workout_sessions"
STRENGTH_LIFTS = "strength_lifts"
METCON_WORKOUTS = "metcon_workouts"
METCON_MOVEMENTS = "metcon_movements"
EXERCISE_TYPES = "exercise_types"
METCON_TYPES = "metcon_types"
MOVEMENT_TYPES = "movement_types"

# parent table -> (child table, foreign key column) pairs
CASCADES: Dict[str, Tuple[Tuple[str, str], ...]] = {
    USERS: ((WORKOUT_SESSIONS, "user_id"),),
    WORKOUT_SESSIONS: (
        (STRENGTH_LIFTS, "workout_session_id"),
        (METCON_WORKOUTS, "workout_session_id"),
    ),
    METCON_WORKOUTS: ((METCON_MOVEMENTS, "metcon_workout_id"),),
}
