"""
Auth router.

This router contains endpoints for:
- POST /auth/register - Create a new account and issue a token
- POST /auth/login - Sign in to an account and issue a token

Both endpoints take an identity token from the upstream identity provider;
the account email always comes from the verified token, never from the
request body. Registration refuses an email that already has an account.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_settings, get_user_service
from application.services import UserService
from backend.auth import create_access_token, role_for_email, verify_identity_token
from backend.settings import Settings
from domain.models import User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class RegisterRequest(BaseModel):
    """Request model for registration."""
    id_token: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)


class LoginRequest(BaseModel):
    """Request model for login."""
    id_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Issued access token and the signed-in user."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: User


def _display_name(claims: Dict[str, Any]) -> str:
    name = (claims.get("name") or "").strip()
    return name[:100] if name else claims["email"].split("@", 1)[0]


def _token_response(user: User, settings: Settings) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(
            user.id, settings, role=role_for_email(user.email, settings)
        ),
        expires_in=settings.jwt_expiry_minutes * 60,
        user=user,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    request: RegisterRequest,
    settings: Settings = Depends(get_settings),
    service: UserService = Depends(get_user_service),
):
    """
    Create an account for the verified identity.

    Returns 400 if the email already has an account; use /auth/login instead.
    """
    claims = verify_identity_token(request.id_token, settings)
    user = await service.register(claims["email"], request.name)
    return _token_response(user, settings)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    settings: Settings = Depends(get_settings),
    service: UserService = Depends(get_user_service),
):
    """
    Sign in with a verified identity, creating the account on first sign-in.

    Returns:
        Access token plus the user profile
    """
    claims = verify_identity_token(request.id_token, settings)
    user = await service.login(claims["email"], _display_name(claims))
    logger.info(f"User {user.id} signed in")
    return _token_response(user, settings)
