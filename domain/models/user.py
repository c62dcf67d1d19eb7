"""
User entity.

Users are created on first registration (or first login) and are the
owners of every workout session, lift and metcon workout.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """
    An account that owns workout data.

    Email addresses are stored lower-cased so lookups are case-insensitive.

    Examples:
        >>> user = User(email="Lifter@Example.com", name="Lifter")
        >>> user.email
        'lifter@example.com'
    """

    id: Optional[str] = Field(default=None, description="User UUID")
    email: str = Field(..., min_length=3, max_length=255, description="Login email")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    created_date: datetime = Field(default_factory=utc_now)
    last_login_date: Optional[datetime] = Field(default=None)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lower-case and trim the email address."""
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Email must contain '@'")
        return v

    def record_login(self, when: Optional[datetime] = None) -> None:
        """Stamp the last login time (UTC now by default)."""
        self.last_login_date = when or utc_now()
