"""
Store-backed implementation of WorkoutSessionRepository.
"""
import logging
from datetime import date
from typing import Optional

from application.ports.record_store import RecordStore
from domain.models import WorkoutSession
from infrastructure.db.entity_repository import (
    EntityConfig,
    EntityRepository,
    FieldRule,
    Reference,
)
from infrastructure.db.schema import USERS, WORKOUT_SESSIONS

logger = logging.getLogger(__name__)

WORKOUT_SESSION_CONFIG = EntityConfig(
    table=WORKOUT_SESSIONS,
    model=WorkoutSession,
    label="Workout session",
    owner_column="user_id",
    date_column="date",
    rules=(
        FieldRule(
            "date",
            WorkoutSession.is_valid_date,
            "Workout date cannot be in the future",
        ),
    ),
    references=(Reference("user_id", USERS, "User"),),
    mutable_fields=frozenset({"date", "notes"}),
)


class WorkoutSessionRepository(EntityRepository[WorkoutSession]):
    """Session persistence; one session per user per date."""

    def __init__(self, store: RecordStore):
        super().__init__(store, WORKOUT_SESSION_CONFIG)

    async def get_by_user_and_date(
        self, user_id: str, session_date: date
    ) -> Optional[WorkoutSession]:
        rows = await self._store.find(
            WORKOUT_SESSIONS,
            eq={"user_id": user_id, "date": session_date.isoformat()},
            limit=1,
        )
        return self._from_row(rows[0]) if rows else None

    async def exists_for_date(
        self,
        user_id: str,
        session_date: date,
        exclude_id: Optional[str] = None,
    ) -> bool:
        rows = await self._store.find(
            WORKOUT_SESSIONS,
            eq={"user_id": user_id, "date": session_date.isoformat()},
        )
        return any(row["id"] != exclude_id for row in rows)
