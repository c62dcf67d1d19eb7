"""
Strength lifts router.

This router contains endpoints for:
- GET /strength-lifts - List the caller's lifts (date range, exercise type filters)
- POST /strength-lifts - Log a lift in one of the caller's sessions
- GET /strength-lifts/session/{session_id} - Lifts of one session, in order
- GET /strength-lifts/personal-record/{exercise_type_id} - Heaviest lift of a type
- GET /strength-lifts/{lift_id} - Get one lift
- PUT /strength-lifts/{lift_id} - Update a lift
- DELETE /strength-lifts/{lift_id} - Delete a lift

Weights, durations and rest periods use 0.25 increments. A lift posted
without an order is appended after the session's last lift.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_strength_lift_service
from application.exceptions import EntityNotFoundError
from application.services import StrengthLiftService
from domain.models import StrengthLift

router = APIRouter(
    prefix="/strength-lifts",
    tags=["Strength Lifts"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class StrengthLiftFields(BaseModel):
    """Editable lift fields. Range and increment rules are checked on save."""
    exercise_type_id: Optional[int] = None
    structure_type: Optional[str] = Field(default=None, max_length=50)
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight: Optional[float] = None
    additional_weight: Optional[float] = None
    duration: Optional[float] = None
    rest_period: Optional[float] = None
    comments: Optional[str] = Field(default=None, max_length=1000)
    order: Optional[int] = None


class CreateStrengthLiftRequest(StrengthLiftFields):
    """Request model for logging a strength lift."""
    workout_session_id: str
    exercise_type_id: int


class UpdateStrengthLiftRequest(StrengthLiftFields):
    """Request model for updating a strength lift. Omitted or null fields are unchanged."""
    pass


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=List[StrengthLift])
async def list_lifts(
    start_date: Optional[date] = Query(None, description="Earliest session date"),
    end_date: Optional[date] = Query(None, description="Latest session date"),
    exercise_type_id: Optional[int] = Query(None, description="Exercise type filter"),
    user_id: str = Depends(get_current_user),
    service: StrengthLiftService = Depends(get_strength_lift_service),
):
    return await service.list_lifts(user_id, start_date, end_date, exercise_type_id)


@router.post("", response_model=StrengthLift, status_code=201)
async def create_lift(
    request: CreateStrengthLiftRequest,
    user_id: str = Depends(get_current_user),
    service: StrengthLiftService = Depends(get_strength_lift_service),
):
    """
    Log a strength lift.

    Returns:
        The stored lift including its assigned ``order``
    """
    lift = StrengthLift(**request.model_dump(exclude_none=True))
    return await service.create_lift(user_id, lift)


@router.get("/session/{session_id}", response_model=List[StrengthLift])
async def list_session_lifts(
    session_id: str,
    user_id: str = Depends(get_current_user),
    service: StrengthLiftService = Depends(get_strength_lift_service),
):
    return await service.list_session_lifts(user_id, session_id)


@router.get("/personal-record/{exercise_type_id}", response_model=StrengthLift)
async def get_personal_record(
    exercise_type_id: int,
    user_id: str = Depends(get_current_user),
    service: StrengthLiftService = Depends(get_strength_lift_service),
):
    lift = await service.get_personal_record(user_id, exercise_type_id)
    if lift is None:
        raise EntityNotFoundError("No personal record found for this exercise")
    return lift


@router.get("/{lift_id}", response_model=StrengthLift)
async def get_lift(
    lift_id: str,
    user_id: str = Depends(get_current_user),
    service: StrengthLiftService = Depends(get_strength_lift_service),
):
    lift = await service.get_lift(user_id, lift_id)
    if lift is None:
        raise EntityNotFoundError("Strength lift not found")
    return lift


@router.put("/{lift_id}", response_model=StrengthLift)
async def update_lift(
    lift_id: str,
    request: UpdateStrengthLiftRequest,
    user_id: str = Depends(get_current_user),
    service: StrengthLiftService = Depends(get_strength_lift_service),
):
    changes = request.model_dump(exclude_none=True)
    return await service.update_lift(user_id, lift_id, changes)


@router.delete("/{lift_id}")
async def delete_lift(
    lift_id: str,
    user_id: str = Depends(get_current_user),
    service: StrengthLiftService = Depends(get_strength_lift_service),
):
    if not await service.delete_lift(user_id, lift_id):
        raise EntityNotFoundError("Strength lift not found")
    return {"message": "Strength lift deleted successfully"}
