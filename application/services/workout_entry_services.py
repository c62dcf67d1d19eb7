"""
Strength lift and metcon workout services.

Both services forward to their owner-scoped repositories. Updates load the
caller's existing entry, apply the requested changes and persist the result,
so omitted fields keep their stored values.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from application.exceptions import EntityNotFoundError
from application.ports import MetconWorkoutRepository, StrengthLiftRepository
from application.services.workout_session_service import check_date_range
from domain.models import MetconMovement, MetconWorkout, StrengthLift

logger = logging.getLogger(__name__)


class StrengthLiftService:
    """Strength lift operations for the authenticated user."""

    def __init__(self, lifts: StrengthLiftRepository) -> None:
        self._lifts = lifts

    async def create_lift(self, owner_id: str, lift: StrengthLift) -> StrengthLift:
        return await self._lifts.create(lift, owner_id=owner_id)

    async def update_lift(
        self, owner_id: str, lift_id: str, changes: Dict[str, Any]
    ) -> StrengthLift:
        existing = await self._lifts.get_by_id(lift_id, owner_id)
        if existing is None:
            raise EntityNotFoundError(f"Strength lift with ID {lift_id} not found")
        return await self._lifts.update(existing.model_copy(update=changes), owner_id=owner_id)

    async def delete_lift(self, owner_id: str, lift_id: str) -> bool:
        return await self._lifts.delete(lift_id, owner_id)

    async def get_lift(self, owner_id: str, lift_id: str) -> Optional[StrengthLift]:
        return await self._lifts.get_by_id(lift_id, owner_id)

    async def list_session_lifts(self, owner_id: str, session_id: str) -> List[StrengthLift]:
        return await self._lifts.list_by_session(session_id, owner_id)

    async def list_lifts(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        exercise_type_id: Optional[int] = None,
    ) -> List[StrengthLift]:
        check_date_range(start_date, end_date)
        if exercise_type_id is not None:
            return await self._lifts.list_by_exercise_type(
                owner_id, exercise_type_id, start_date, end_date
            )
        return await self._lifts.list_by_owner(owner_id, start_date, end_date)

    async def get_personal_record(
        self, owner_id: str, exercise_type_id: int
    ) -> Optional[StrengthLift]:
        return await self._lifts.get_personal_record(owner_id, exercise_type_id)


class MetconWorkoutService:
    """Metcon workout operations for the authenticated user."""

    def __init__(self, workouts: MetconWorkoutRepository) -> None:
        self._workouts = workouts

    async def create_workout(self, owner_id: str, workout: MetconWorkout) -> MetconWorkout:
        return await self._workouts.create(workout, owner_id=owner_id)

    async def update_workout(
        self,
        owner_id: str,
        workout_id: str,
        changes: Dict[str, Any],
        movements: Optional[List[MetconMovement]] = None,
    ) -> MetconWorkout:
        """
        Update a workout; ``movements``, when given, replaces the stored list.
        """
        existing = await self._workouts.get_by_id(workout_id, owner_id)
        if existing is None:
            raise EntityNotFoundError(f"Metcon workout with ID {workout_id} not found")
        updated = existing.model_copy(update=changes)
        if movements is not None:
            updated.movements = movements
        return await self._workouts.update(updated, owner_id=owner_id)

    async def delete_workout(self, owner_id: str, workout_id: str) -> bool:
        return await self._workouts.delete(workout_id, owner_id)

    async def get_workout(self, owner_id: str, workout_id: str) -> Optional[MetconWorkout]:
        return await self._workouts.get_by_id(workout_id, owner_id)

    async def list_session_workouts(
        self, owner_id: str, session_id: str
    ) -> List[MetconWorkout]:
        return await self._workouts.list_by_session(session_id, owner_id)

    async def list_workouts(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        metcon_type_id: Optional[int] = None,
    ) -> List[MetconWorkout]:
        check_date_range(start_date, end_date)
        if metcon_type_id is not None:
            return await self._workouts.list_by_metcon_type(
                owner_id, metcon_type_id, start_date, end_date
            )
        return await self._workouts.list_by_owner(owner_id, start_date, end_date)
