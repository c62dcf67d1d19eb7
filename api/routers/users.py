"""
Users router for the authenticated account.

This router contains endpoints for:
- GET /users/me - Get the caller's profile
- PUT /users/me - Update name or email
- DELETE /users/me - Delete the account and all of its workouts
- GET /users/check-email - Whether an email is free to register (no auth)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_user_service
from application.exceptions import EntityNotFoundError
from application.services import UserService
from domain.models import User

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


class EmailAvailabilityResponse(BaseModel):
    available: bool


class UpdateProfileRequest(BaseModel):
    """Request model for profile updates. Omitted fields are unchanged."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)


@router.get("/me", response_model=User)
async def get_me(
    user_id: str = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_profile(user_id)


@router.put("/me", response_model=User)
async def update_me(
    request: UpdateProfileRequest,
    user_id: str = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.update_profile(user_id, name=request.name, email=request.email)


@router.delete("/me")
async def delete_me(
    user_id: str = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """
    Delete the caller's account.

    Sessions, lifts and metcons are removed with it.
    """
    if not await service.delete_account(user_id):
        raise EntityNotFoundError(f"User with ID {user_id} not found")
    return {"message": "Account deleted successfully"}


@router.get("/check-email", response_model=EmailAvailabilityResponse)
async def check_email(
    email: str = Query("", description="Email to look up"),
    service: UserService = Depends(get_user_service),
):
    """Returns 400 if the email is blank."""
    return EmailAvailabilityResponse(available=await service.is_email_available(email))
