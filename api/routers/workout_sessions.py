"""
Workout sessions router.

This router contains endpoints for:
- GET /workout-sessions - List the caller's sessions, newest first
- POST /workout-sessions - Create the session for a date
- GET /workout-sessions/by-date/{date} - Get the session logged on a date
- GET /workout-sessions/{session_id} - Get one session
- PUT /workout-sessions/{session_id} - Change date or notes
- DELETE /workout-sessions/{session_id} - Delete a session and its entries

A user has at most one session per calendar date.
"""

from datetime import date as date_type
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_session_service
from application.exceptions import EntityNotFoundError
from application.services import WorkoutSessionService
from domain.models import WorkoutSession

router = APIRouter(
    prefix="/workout-sessions",
    tags=["Workout Sessions"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateSessionRequest(BaseModel):
    """Request model for creating a workout session."""
    date: date_type
    notes: Optional[str] = Field(default=None, max_length=1000)


class UpdateSessionRequest(BaseModel):
    """Request model for updating a workout session."""
    date: Optional[date_type] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=List[WorkoutSession])
async def list_sessions(
    start_date: Optional[date_type] = Query(None, description="Earliest session date"),
    end_date: Optional[date_type] = Query(None, description="Latest session date"),
    user_id: str = Depends(get_current_user),
    service: WorkoutSessionService = Depends(get_session_service),
):
    return await service.list_sessions(user_id, start_date, end_date)


@router.post("", response_model=WorkoutSession, status_code=201)
async def create_session(
    request: CreateSessionRequest,
    user_id: str = Depends(get_current_user),
    service: WorkoutSessionService = Depends(get_session_service),
):
    """
    Create a workout session.

    Returns 400 if the date is in the future or already has a session.
    """
    return await service.create_session(user_id, request.date, request.notes)


@router.get("/by-date/{session_date}", response_model=WorkoutSession)
async def get_session_by_date(
    session_date: date_type,
    user_id: str = Depends(get_current_user),
    service: WorkoutSessionService = Depends(get_session_service),
):
    session = await service.get_session_by_date(user_id, session_date)
    if session is None:
        raise EntityNotFoundError("No workout session found for the specified date")
    return session


@router.get("/{session_id}", response_model=WorkoutSession)
async def get_session(
    session_id: str,
    user_id: str = Depends(get_current_user),
    service: WorkoutSessionService = Depends(get_session_service),
):
    session = await service.get_session(user_id, session_id)
    if session is None:
        raise EntityNotFoundError("Workout session not found")
    return session


@router.put("/{session_id}", response_model=WorkoutSession)
async def update_session(
    session_id: str,
    request: UpdateSessionRequest,
    user_id: str = Depends(get_current_user),
    service: WorkoutSessionService = Depends(get_session_service),
):
    return await service.update_session(
        user_id, session_id, session_date=request.date, notes=request.notes
    )


@router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    user_id: str = Depends(get_current_user),
    service: WorkoutSessionService = Depends(get_session_service),
):
    if not await service.delete_session(user_id, session_id):
        raise EntityNotFoundError("Workout session not found")
    return {"message": "Workout session deleted successfully"}
