"""
Metcon workouts router.

This router contains endpoints for:
- GET /metcon-workouts - List the caller's metcons (date range, metcon type filters)
- POST /metcon-workouts - Log a metcon with its movements
- GET /metcon-workouts/session/{session_id} - Metcons of one session, in order
- GET /metcon-workouts/{workout_id} - Get one metcon
- PUT /metcon-workouts/{workout_id} - Update a metcon (movements replaced when given)
- DELETE /metcon-workouts/{workout_id} - Delete a metcon and its movements
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_metcon_workout_service
from application.exceptions import EntityNotFoundError
from application.services import MetconWorkoutService
from domain.models import MetconMovement, MetconWorkout

router = APIRouter(
    prefix="/metcon-workouts",
    tags=["Metcon Workouts"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class MovementRequest(BaseModel):
    """One movement of a metcon. Reps or distance depending on the movement type."""
    movement_type_id: int
    reps: Optional[int] = None
    distance: Optional[float] = None
    weight: Optional[float] = None
    order: Optional[int] = None

    def to_movement(self) -> MetconMovement:
        return MetconMovement(**self.model_dump(exclude_none=True))


class MetconWorkoutFields(BaseModel):
    metcon_type_id: Optional[int] = None
    rounds: Optional[int] = None
    time_cap_minutes: Optional[float] = None
    actual_time_minutes: Optional[float] = None
    rest_between_rounds: Optional[float] = None
    comments: Optional[str] = Field(default=None, max_length=1000)
    order: Optional[int] = None
    movements: Optional[List[MovementRequest]] = None


class CreateMetconWorkoutRequest(MetconWorkoutFields):
    """Request model for logging a metcon workout."""
    workout_session_id: str
    metcon_type_id: int


class UpdateMetconWorkoutRequest(MetconWorkoutFields):
    """Request model for updating a metcon workout. Omitted or null fields are unchanged."""
    pass


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=List[MetconWorkout])
async def list_workouts(
    start_date: Optional[date] = Query(None, description="Earliest session date"),
    end_date: Optional[date] = Query(None, description="Latest session date"),
    metcon_type_id: Optional[int] = Query(None, description="Metcon type filter"),
    user_id: str = Depends(get_current_user),
    service: MetconWorkoutService = Depends(get_metcon_workout_service),
):
    return await service.list_workouts(user_id, start_date, end_date, metcon_type_id)


@router.post("", response_model=MetconWorkout, status_code=201)
async def create_workout(
    request: CreateMetconWorkoutRequest,
    user_id: str = Depends(get_current_user),
    service: MetconWorkoutService = Depends(get_metcon_workout_service),
):
    fields = request.model_dump(exclude_none=True, exclude={"movements"})
    workout = MetconWorkout(
        **fields,
        movements=[movement.to_movement() for movement in request.movements or []],
    )
    return await service.create_workout(user_id, workout)


@router.get("/session/{session_id}", response_model=List[MetconWorkout])
async def list_session_workouts(
    session_id: str,
    user_id: str = Depends(get_current_user),
    service: MetconWorkoutService = Depends(get_metcon_workout_service),
):
    return await service.list_session_workouts(user_id, session_id)


@router.get("/{workout_id}", response_model=MetconWorkout)
async def get_workout(
    workout_id: str,
    user_id: str = Depends(get_current_user),
    service: MetconWorkoutService = Depends(get_metcon_workout_service),
):
    workout = await service.get_workout(user_id, workout_id)
    if workout is None:
        raise EntityNotFoundError("Metcon workout not found")
    return workout


@router.put("/{workout_id}", response_model=MetconWorkout)
async def update_workout(
    workout_id: str,
    request: UpdateMetconWorkoutRequest,
    user_id: str = Depends(get_current_user),
    service: MetconWorkoutService = Depends(get_metcon_workout_service),
):
    changes = request.model_dump(exclude_none=True, exclude={"movements"})
    movements = None
    if request.movements is not None:
        movements = [movement.to_movement() for movement in request.movements]
    return await service.update_workout(user_id, workout_id, changes, movements)


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: str,
    user_id: str = Depends(get_current_user),
    service: MetconWorkoutService = Depends(get_metcon_workout_service),
):
    if not await service.delete_workout(user_id, workout_id):
        raise EntityNotFoundError("Metcon workout not found")
    return {"message": "Metcon workout deleted successfully"}
