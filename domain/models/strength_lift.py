"""
StrengthLift entity.

A single strength exercise logged inside a workout session: the exercise
type, the set/rep structure, load and timing. Validators are advisory;
repositories call them before any write.
"""

from typing import Optional

from pydantic import BaseModel, Field

from domain.models.measurements import is_in_range, is_quarter_increment

MIN_SETS, MAX_SETS = 1, 50
MIN_REPS, MAX_REPS = 1, 500


class StrengthLift(BaseModel):
    """
    A strength lift within a workout session.

    Numeric fields carry no pydantic constraints; out-of-range values are
    reported by the matching ``is_valid_*`` predicate.

    Examples:
        >>> lift = StrengthLift(workout_session_id="s1", exercise_type_id=1,
        ...                     sets=5, reps=5, weight=135.25)
        >>> lift.is_valid_weight()
        True
        >>> lift.model_copy(update={"weight": 135.3}).is_valid_weight()
        False
    """

    # Identity and ownership
    id: Optional[str] = Field(default=None, description="Lift UUID")
    workout_session_id: str = Field(..., description="Parent session ID")
    exercise_type_id: int = Field(..., description="Exercise type catalog ID")

    # Work prescription
    structure_type: str = Field(
        default="Standard",
        max_length=50,
        description="Set/rep structure (e.g. 'Standard', 'EMOM', 'AMRAP')",
    )
    sets: Optional[int] = Field(default=None, description="Number of sets")
    reps: Optional[int] = Field(default=None, description="Reps per set")

    # Load and timing (quarter increments)
    weight: float = Field(default=0, description="Working weight")
    additional_weight: Optional[float] = Field(
        default=None, description="Extra load, e.g. a weight vest"
    )
    duration: Optional[float] = Field(default=None, description="Duration in minutes")
    rest_period: Optional[float] = Field(default=None, description="Rest in minutes")

    comments: Optional[str] = Field(default=None, max_length=1000)
    order: int = Field(default=0, description="Position within the session")

    def is_valid_weight(self) -> bool:
        return self.weight is not None and is_quarter_increment(self.weight)

    def is_valid_additional_weight(self) -> bool:
        return is_quarter_increment(self.additional_weight)

    def is_valid_duration(self) -> bool:
        return is_quarter_increment(self.duration)

    def is_valid_rest_period(self) -> bool:
        return is_quarter_increment(self.rest_period)

    def is_valid_sets(self) -> bool:
        return is_in_range(self.sets, MIN_SETS, MAX_SETS)

    def is_valid_reps(self) -> bool:
        return is_in_range(self.reps, MIN_REPS, MAX_REPS)

    @property
    def total_weight(self) -> float:
        """Working weight plus any additional weight."""
        return self.weight + (self.additional_weight or 0)
