"""
Store-backed implementation of MetconWorkoutRepository.

Movements are stored in their own table and written with the workout:
create inserts them, update replaces them, and reads load them back in
``order``. Movement orders left at 0 are numbered 1..n within the workout.
"""
import logging
import uuid
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional

from application.exceptions import DomainValidationError, ReferenceNotFoundError
from application.ports.record_store import RecordStore, Row
from domain.models import MetconMovement, MetconWorkout, MovementType
from domain.models.metcon_workout import (
    MAX_MOVEMENT_REPS,
    MAX_ROUNDS,
    MIN_MOVEMENT_REPS,
    MIN_ROUNDS,
)
from infrastructure.db.entity_repository import (
    EntityConfig,
    EntityRepository,
    FieldRule,
    Reference,
)
from infrastructure.db.schema import (
    METCON_MOVEMENTS,
    METCON_TYPES,
    METCON_WORKOUTS,
    MOVEMENT_TYPES,
    WORKOUT_SESSIONS,
)

logger = logging.getLogger(__name__)

METCON_WORKOUT_CONFIG = EntityConfig(
    table=METCON_WORKOUTS,
    model=MetconWorkout,
    label="Metcon workout",
    parent_column="workout_session_id",
    rules=(
        FieldRule(
            "rounds",
            MetconWorkout.is_valid_rounds,
            f"Rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}",
        ),
        FieldRule(
            "time_cap_minutes",
            MetconWorkout.is_valid_time_cap_minutes,
            "Time cap must use fractional increments of 0.25",
        ),
        FieldRule(
            "actual_time_minutes",
            MetconWorkout.is_valid_actual_time_minutes,
            "Actual time must use fractional increments of 0.25",
        ),
        FieldRule(
            "rest_between_rounds",
            MetconWorkout.is_valid_rest_between_rounds,
            "Rest between rounds must use fractional increments of 0.25",
        ),
    ),
    references=(
        Reference("workout_session_id", WORKOUT_SESSIONS, "Workout session", owned=True),
        Reference("metcon_type_id", METCON_TYPES, "Metcon type"),
    ),
    mutable_fields=frozenset(
        {
            "metcon_type_id",
            "rounds",
            "time_cap_minutes",
            "actual_time_minutes",
            "rest_between_rounds",
            "comments",
            "order",
        }
    ),
    exclude_fields=frozenset({"movements"}),
)

MOVEMENT_RULES = (
    FieldRule(
        "movements.reps",
        MetconMovement.is_valid_reps,
        f"Movement reps must be between {MIN_MOVEMENT_REPS} and {MAX_MOVEMENT_REPS}",
    ),
    FieldRule(
        "movements.distance",
        MetconMovement.is_valid_distance,
        "Movement distance must be greater than 0",
    ),
    FieldRule(
        "movements.weight",
        MetconMovement.is_valid_weight,
        "Movement weight must use fractional increments of 0.25",
    ),
)


class MetconWorkoutRepository(EntityRepository[MetconWorkout]):
    """Metcon workout persistence including its movements."""

    def __init__(self, store: RecordStore):
        super().__init__(store, METCON_WORKOUT_CONFIG)

    def validate(self, workout: MetconWorkout) -> None:
        super().validate(workout)
        for movement in workout.movements:
            for rule in MOVEMENT_RULES:
                if not rule.check(movement):
                    raise DomainValidationError(rule.message, field=rule.field)

    async def _check_references(self, workout, owner_id, columns=None) -> None:
        await super()._check_references(workout, owner_id, columns)
        for movement in workout.movements:
            row = await self._store.get(MOVEMENT_TYPES, movement.movement_type_id)
            if row is None:
                raise ReferenceNotFoundError(
                    f"Movement type with ID {movement.movement_type_id} not found"
                )
            movement_type = MovementType.model_validate(row)
            if not movement.has_valid_measurement(movement_type):
                unit = "reps" if movement_type.is_rep_based else "distance"
                raise DomainValidationError(
                    f"{movement_type.name} must be measured in {unit}",
                    field="movements",
                )

    async def _load(self, rows: List[Row]) -> List[MetconWorkout]:
        if not rows:
            return []
        movement_rows = await self._store.find(
            METCON_MOVEMENTS,
            in_={"metcon_workout_id": [row["id"] for row in rows]},
            order_by="order",
        )
        by_workout: Dict[str, List[Row]] = defaultdict(list)
        for movement in movement_rows:
            by_workout[movement["metcon_workout_id"]].append(movement)
        return [
            MetconWorkout.model_validate({**row, "movements": by_workout.get(row["id"], [])})
            for row in rows
        ]

    async def _after_write(self, workout: MetconWorkout, row: Row) -> MetconWorkout:
        await self._store.delete_where(METCON_MOVEMENTS, eq={"metcon_workout_id": row["id"]})
        saved: List[Row] = []
        for position, movement in enumerate(workout.movements, start=1):
            values = movement.model_dump(mode="json")
            values["id"] = movement.id or str(uuid.uuid4())
            values["metcon_workout_id"] = row["id"]
            values["order"] = movement.order or position
            saved.append(await self._store.insert(METCON_MOVEMENTS, values))
        logger.debug(f"Saved {len(saved)} movements for metcon workout {row['id']}")
        return MetconWorkout.model_validate({**row, "movements": saved})

    async def list_by_metcon_type(
        self,
        owner_id: str,
        metcon_type_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[MetconWorkout]:
        return await self.list_by_owner(
            owner_id, start_date, end_date, where={"metcon_type_id": metcon_type_id}
        )
