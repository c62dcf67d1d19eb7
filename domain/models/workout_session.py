"""
WorkoutSession entity.

A session is one training day for one user. Strength lifts and metcon
workouts hang off a session and inherit its owner.
"""

from datetime import date as date_type, datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def utc_today() -> date_type:
    return datetime.now(timezone.utc).date()


class WorkoutSession(BaseModel):
    """
    A dated workout session owned by a user.

    A user may hold at most one session per date.

    Examples:
        >>> from datetime import date, timedelta
        >>> WorkoutSession(user_id="u1", date=date.today()).is_valid_date(today=date.today())
        True
        >>> tomorrow = date.today() + timedelta(days=1)
        >>> WorkoutSession(user_id="u1", date=tomorrow).is_valid_date(today=date.today())
        False
    """

    id: Optional[str] = Field(default=None, description="Session UUID")
    user_id: str = Field(..., description="Owning user ID")
    date: date_type = Field(..., description="Calendar date of the session")
    notes: Optional[str] = Field(default=None, max_length=1000)

    def is_valid_date(self, today: Optional[date_type] = None) -> bool:
        """Session dates cannot be in the future."""
        return self.date <= (today or utc_today())
