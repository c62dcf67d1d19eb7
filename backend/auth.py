"""
Authentication module for LiftTracker access tokens.

Access tokens are HS256 JWTs signed with the shared JWT secret:
- sub: user ID
- role: "user" or "admin"
- iss: configured issuer
- exp / iat: expiry and issue time

Sign-in starts from an identity token issued by the upstream identity
provider. It is verified against the provider's JWKS endpoint (RS256) or,
when no JWKS URL is configured, a shared secret (HS256). Only a verified
identity token's email is ever trusted.

Provides the FastAPI dependencies that turn the bearer token into the
caller's user ID and that restrict catalog maintenance to admins.
"""
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Header, HTTPException

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

ROLE_USER = "user"
ROLE_ADMIN = "admin"


# =============================================================================
# Access Tokens
# =============================================================================


def role_for_email(email: str, settings: Settings) -> str:
    """Admins are the accounts listed in ADMIN_EMAILS."""
    return ROLE_ADMIN if email.strip().lower() in settings.admin_emails_list else ROLE_USER


def create_access_token(user_id: str, settings: Settings, role: str = ROLE_USER) -> str:
    """Issue a signed access token for a user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "role": role,
        "iss": settings.jwt_issuer,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expiry_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_claims(token: str, settings: Settings) -> Dict[str, Any]:
    """Validate an access token and return its claims."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid access token: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")

    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Token missing user ID")
    logger.debug(f"Access token validated for user: {payload['sub']}")
    return payload


def decode_access_token(token: str, settings: Settings) -> str:
    """Validate an access token and return the user ID it was issued for."""
    return decode_access_claims(token, settings)["sub"]


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Missing authentication. Provide an Authorization header.",
        )
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")
    return authorization.split(" ", 1)[1]


# =============================================================================
# Identity Provider Tokens
# =============================================================================


@lru_cache(maxsize=4)
def _jwks_client(jwks_url: str) -> jwt.PyJWKClient:
    return jwt.PyJWKClient(jwks_url)


def verify_identity_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Verify an identity provider token and return its claims.

    The token must carry an ``email`` claim; ``email_verified``, when
    present, must be true.

    Raises:
        HTTPException: 401 if the token is invalid, 503 if no identity
            provider is configured
    """
    try:
        if settings.identity_jwks_url:
            key = _jwks_client(settings.identity_jwks_url).get_signing_key_from_jwt(token).key
            algorithms = ["RS256"]
        elif settings.identity_token_secret:
            key = settings.identity_token_secret
            algorithms = ["HS256"]
        else:
            logger.error("Identity provider not configured; sign-in is unavailable")
            raise HTTPException(status_code=503, detail="Identity provider not configured")

        claims = jwt.decode(
            token,
            key,
            algorithms=algorithms,
            audience=settings.identity_audience,
            issuer=settings.identity_issuer,
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Identity token expired")
    except jwt.PyJWTError as e:
        logger.warning(f"Invalid identity token: {e}")
        raise HTTPException(status_code=401, detail="Invalid identity token")

    if not claims.get("email"):
        raise HTTPException(status_code=401, detail="Identity token missing email")
    if claims.get("email_verified") is False:
        raise HTTPException(status_code=401, detail="Identity email is not verified")
    return claims


# =============================================================================
# FastAPI Dependencies
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Authenticate via bearer token.
    Returns user_id string.

    Usage:
        @app.get("/protected")
        async def protected_route(user_id: str = Depends(get_current_user)):
            return {"user_id": user_id}
    """
    return decode_access_token(_bearer_token(authorization), settings)


async def require_admin(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Authenticate via bearer token and require the admin role.

    Raises:
        HTTPException: 401 without a valid token, 403 for non-admins
    """
    claims = decode_access_claims(_bearer_token(authorization), settings)
    if claims.get("role") != ROLE_ADMIN:
        logger.warning(f"User {claims['sub']} denied admin operation")
        raise HTTPException(status_code=403, detail="Admin role required")
    return claims["sub"]
