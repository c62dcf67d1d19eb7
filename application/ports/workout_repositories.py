"""
Workout Repository Interfaces (Ports).

This module defines the interfaces for sessions and the entities logged in
them (strength lifts and metcon workouts). Every owner-scoped method takes
the caller's user ID and behaves as "not found" for rows owned by anyone
else.
"""
from datetime import date
from typing import List, Optional, Protocol, TypeVar, runtime_checkable

from domain.models import MetconWorkout, StrengthLift, WorkoutSession

T = TypeVar("T")


@runtime_checkable
class WorkoutSessionRepository(Protocol):
    """Abstract interface for workout session persistence."""

    async def get_by_id(
        self, session_id: str, owner_id: Optional[str] = None
    ) -> Optional[WorkoutSession]:
        """
        Get a session by ID.

        Args:
            session_id: Session UUID
            owner_id: Owner filter; None for unscoped (admin) access

        Returns:
            The session, or None if missing or owned by someone else
        """
        ...

    async def list_by_owner(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[WorkoutSession]:
        """List a user's sessions, newest first, within an inclusive date range."""
        ...

    async def get_by_user_and_date(
        self, user_id: str, session_date: date
    ) -> Optional[WorkoutSession]:
        """Get the session a user logged on a given date."""
        ...

    async def exists_for_date(
        self,
        user_id: str,
        session_date: date,
        exclude_id: Optional[str] = None,
    ) -> bool:
        """Check whether a user already has a session on a date."""
        ...

    async def create(
        self, session: WorkoutSession, owner_id: Optional[str] = None
    ) -> WorkoutSession:
        """
        Create a session.

        Raises:
            DomainValidationError: If the date is in the future
            ReferenceNotFoundError: If the user does not exist
        """
        ...

    async def update(
        self, session: WorkoutSession, owner_id: Optional[str] = None
    ) -> WorkoutSession:
        """
        Update the date and notes of a session.

        Raises:
            EntityNotFoundError: If the session does not exist for this owner
        """
        ...

    async def delete(self, session_id: str, owner_id: Optional[str] = None) -> bool:
        """Delete a session and its lifts and metcon workouts."""
        ...


class SessionEntryRepository(Protocol[T]):
    """
    Shared interface for entities logged inside a session.

    Entries carry a session-scoped ``order``. When created with order 0 they
    are appended after the current maximum.
    """

    async def get_by_id(self, entry_id: str, owner_id: Optional[str] = None) -> Optional[T]:
        ...

    async def list_by_owner(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[T]:
        """List entries across a user's sessions, newest session first."""
        ...

    async def list_by_session(self, session_id: str, owner_id: str) -> List[T]:
        """List the entries of one session in ``order``."""
        ...

    async def create(self, entry: T, owner_id: Optional[str] = None) -> T:
        """
        Create an entry.

        Raises:
            DomainValidationError: If a field fails validation
            ReferenceNotFoundError: If the session or catalog row is missing
        """
        ...

    async def update(self, entry: T, owner_id: Optional[str] = None) -> T:
        """
        Update the mutable fields of an entry.

        Raises:
            EntityNotFoundError: If the entry does not exist for this owner
        """
        ...

    async def delete(self, entry_id: str, owner_id: Optional[str] = None) -> bool:
        ...

    async def get_max_order(self, session_id: str) -> int:
        """Highest ``order`` in a session, 0 when the session is empty."""
        ...


@runtime_checkable
class StrengthLiftRepository(SessionEntryRepository[StrengthLift], Protocol):
    """Abstract interface for strength lift persistence."""

    async def list_by_exercise_type(
        self,
        owner_id: str,
        exercise_type_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[StrengthLift]:
        ...

    async def get_personal_record(
        self, owner_id: str, exercise_type_id: int
    ) -> Optional[StrengthLift]:
        """Heaviest lift (weight plus additional weight) for an exercise."""
        ...


@runtime_checkable
class MetconWorkoutRepository(SessionEntryRepository[MetconWorkout], Protocol):
    """Abstract interface for metcon workout persistence (movements included)."""

    async def list_by_metcon_type(
        self,
        owner_id: str,
        metcon_type_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[MetconWorkout]:
        ...
