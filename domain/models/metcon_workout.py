"""
MetconWorkout and MetconMovement entities.

A metcon (metabolic conditioning) workout is logged inside a session and
holds an ordered list of movements, each measured by reps or by distance.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.catalog import MovementType
from domain.models.measurements import is_in_range, is_quarter_increment

MIN_ROUNDS, MAX_ROUNDS = 1, 100
MIN_MOVEMENT_REPS, MAX_MOVEMENT_REPS = 1, 10000


class MetconMovement(BaseModel):
    """One movement inside a metcon workout."""

    id: Optional[str] = Field(default=None, description="Movement UUID")
    metcon_workout_id: Optional[str] = Field(
        default=None, description="Parent workout ID (set on save)"
    )
    movement_type_id: int = Field(..., description="Movement type catalog ID")
    reps: Optional[int] = Field(default=None)
    distance: Optional[float] = Field(default=None, description="Distance in meters")
    weight: Optional[float] = Field(default=None)
    order: int = Field(default=0, description="Position within the workout")

    def is_valid_reps(self) -> bool:
        return is_in_range(self.reps, MIN_MOVEMENT_REPS, MAX_MOVEMENT_REPS)

    def is_valid_distance(self) -> bool:
        return self.distance is None or self.distance > 0

    def is_valid_weight(self) -> bool:
        return is_quarter_increment(self.weight)

    def has_valid_measurement(self, movement_type: MovementType) -> bool:
        """
        Check the movement is measured the way its type expects.

        Rep-based movements carry reps and no distance; distance-based
        movements carry a distance and no reps.
        """
        if movement_type.is_rep_based:
            return self.reps is not None and self.distance is None
        if movement_type.is_distance_based:
            return self.distance is not None and self.reps is None
        return False


class MetconWorkout(BaseModel):
    """
    A metcon workout within a workout session.

    Examples:
        >>> workout = MetconWorkout(workout_session_id="s1", metcon_type_id=2,
        ...                         rounds=5, time_cap_minutes=20)
        >>> workout.is_valid_rounds(), workout.is_valid_time_cap_minutes()
        (True, True)
    """

    id: Optional[str] = Field(default=None, description="Workout UUID")
    workout_session_id: str = Field(..., description="Parent session ID")
    metcon_type_id: int = Field(..., description="Metcon type catalog ID")

    rounds: Optional[int] = Field(default=None)
    time_cap_minutes: Optional[float] = Field(default=None)
    actual_time_minutes: Optional[float] = Field(default=None)
    rest_between_rounds: Optional[float] = Field(
        default=None, description="Rest between rounds in minutes"
    )

    comments: Optional[str] = Field(default=None, max_length=1000)
    order: int = Field(default=0, description="Position within the session")
    movements: List[MetconMovement] = Field(default_factory=list)

    def is_valid_rounds(self) -> bool:
        return is_in_range(self.rounds, MIN_ROUNDS, MAX_ROUNDS)

    def is_valid_time_cap_minutes(self) -> bool:
        return is_quarter_increment(self.time_cap_minutes)

    def is_valid_actual_time_minutes(self) -> bool:
        return is_quarter_increment(self.actual_time_minutes)

    def is_valid_rest_between_rounds(self) -> bool:
        return is_quarter_increment(self.rest_between_rounds)
