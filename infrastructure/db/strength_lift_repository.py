"""
Store-backed implementation of StrengthLiftRepository.

Validation messages name the field and the rule, e.g.
"Weight must use fractional increments of 0.25".
"""
import logging
from datetime import date
from typing import List, Optional

from application.ports.record_store import RecordStore
from domain.models import StrengthLift
from domain.models.strength_lift import MAX_REPS, MAX_SETS, MIN_REPS, MIN_SETS
from infrastructure.db.entity_repository import (
    EntityConfig,
    EntityRepository,
    FieldRule,
    Reference,
)
from infrastructure.db.schema import EXERCISE_TYPES, STRENGTH_LIFTS, WORKOUT_SESSIONS

logger = logging.getLogger(__name__)

STRENGTH_LIFT_RULES = (
    FieldRule(
        "weight",
        StrengthLift.is_valid_weight,
        "Weight must use fractional increments of 0.25",
    ),
    FieldRule(
        "additional_weight",
        StrengthLift.is_valid_additional_weight,
        "Additional weight must use fractional increments of 0.25",
    ),
    FieldRule(
        "duration",
        StrengthLift.is_valid_duration,
        "Duration must use fractional increments of 0.25",
    ),
    FieldRule(
        "rest_period",
        StrengthLift.is_valid_rest_period,
        "Rest period must use fractional increments of 0.25",
    ),
    FieldRule(
        "sets",
        StrengthLift.is_valid_sets,
        f"Sets must be between {MIN_SETS} and {MAX_SETS}",
    ),
    FieldRule(
        "reps",
        StrengthLift.is_valid_reps,
        f"Reps must be between {MIN_REPS} and {MAX_REPS}",
    ),
)

STRENGTH_LIFT_CONFIG = EntityConfig(
    table=STRENGTH_LIFTS,
    model=StrengthLift,
    label="Strength lift",
    parent_column="workout_session_id",
    rules=STRENGTH_LIFT_RULES,
    references=(
        Reference("workout_session_id", WORKOUT_SESSIONS, "Workout session", owned=True),
        Reference("exercise_type_id", EXERCISE_TYPES, "Exercise type"),
    ),
    mutable_fields=frozenset(
        {
            "exercise_type_id",
            "structure_type",
            "sets",
            "reps",
            "weight",
            "additional_weight",
            "duration",
            "rest_period",
            "comments",
            "order",
        }
    ),
)


class StrengthLiftRepository(EntityRepository[StrengthLift]):
    """Strength lift persistence scoped through the owning session."""

    def __init__(self, store: RecordStore):
        super().__init__(store, STRENGTH_LIFT_CONFIG)

    async def list_by_exercise_type(
        self,
        owner_id: str,
        exercise_type_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[StrengthLift]:
        return await self.list_by_owner(
            owner_id,
            start_date,
            end_date,
            where={"exercise_type_id": exercise_type_id},
        )

    async def get_personal_record(
        self, owner_id: str, exercise_type_id: int
    ) -> Optional[StrengthLift]:
        lifts = await self.list_by_exercise_type(owner_id, exercise_type_id)
        if not lifts:
            return None
        return max(lifts, key=lambda lift: lift.total_weight)
