"""
Workout session service.

Enforces one session per user per date and caches session listings per
owner. Every session write drops the owner's cached listings by tag.
"""
import logging
from datetime import date
from typing import List, Optional

from application.exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    InvalidOperationError,
)
from application import cache_keys
from application.cache_keys import CacheTTL
from application.ports import CacheService, WorkoutSessionRepository
from domain.models import WorkoutSession

logger = logging.getLogger(__name__)


def check_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    """
    Raises:
        DomainValidationError: If start_date is after end_date
    """
    if start_date and end_date and start_date > end_date:
        raise DomainValidationError(
            "Start date must be on or before end date", field="start_date"
        )


class WorkoutSessionService:
    """Session operations for the authenticated user."""

    def __init__(
        self,
        sessions: WorkoutSessionRepository,
        cache: CacheService,
        ttl: Optional[CacheTTL] = None,
    ) -> None:
        self._sessions = sessions
        self._cache = cache
        self._ttl = ttl or CacheTTL()

    async def _invalidate(self, owner_id: str) -> None:
        await self._cache.remove_by_tag(cache_keys.owner_tag(owner_id))

    async def create_session(
        self, owner_id: str, session_date: date, notes: Optional[str] = None
    ) -> WorkoutSession:
        """
        Create the session for a date.

        Raises:
            InvalidOperationError: If the user already has a session that day
            DomainValidationError: If the date is in the future
            ReferenceNotFoundError: If the user no longer exists
        """
        session = WorkoutSession(user_id=owner_id, date=session_date, notes=notes)
        if not session.is_valid_date():
            raise DomainValidationError("Workout date cannot be in the future", field="date")
        if await self._sessions.exists_for_date(owner_id, session_date):
            raise InvalidOperationError(
                f"A workout session already exists for {session_date.isoformat()}"
            )
        created = await self._sessions.create(session, owner_id=owner_id)
        await self._invalidate(owner_id)
        return created

    async def update_session(
        self,
        owner_id: str,
        session_id: str,
        *,
        session_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> WorkoutSession:
        existing = await self._sessions.get_by_id(session_id, owner_id)
        if existing is None:
            raise EntityNotFoundError(f"Workout session with ID {session_id} not found")

        changes = {}
        if session_date is not None and session_date != existing.date:
            if await self._sessions.exists_for_date(owner_id, session_date, exclude_id=session_id):
                raise InvalidOperationError(
                    f"A workout session already exists for {session_date.isoformat()}"
                )
            changes["date"] = session_date
        if notes is not None:
            changes["notes"] = notes

        updated = await self._sessions.update(
            existing.model_copy(update=changes), owner_id=owner_id
        )
        await self._invalidate(owner_id)
        return updated

    async def delete_session(self, owner_id: str, session_id: str) -> bool:
        deleted = await self._sessions.delete(session_id, owner_id)
        if deleted:
            await self._invalidate(owner_id)
        return deleted

    async def get_session(self, owner_id: str, session_id: str) -> Optional[WorkoutSession]:
        return await self._sessions.get_by_id(session_id, owner_id)

    async def get_session_by_date(
        self, owner_id: str, session_date: date
    ) -> Optional[WorkoutSession]:
        return await self._sessions.get_by_user_and_date(owner_id, session_date)

    async def list_sessions(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[WorkoutSession]:
        """List sessions newest first, served from the cache when possible."""
        check_date_range(start_date, end_date)
        sessions = await self._cache.get_or_set(
            cache_keys.user_workout_sessions(owner_id, start_date, end_date),
            lambda: self._sessions.list_by_owner(owner_id, start_date, end_date),
            self._ttl.workout_data,
            tags=[cache_keys.owner_tag(owner_id)],
        )
        return [session.model_copy() for session in sessions or []]
