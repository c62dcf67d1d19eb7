"""
Store-backed implementation of UserRepository.

Emails are stored lower-cased (see domain.models.User), so equality
lookups on the normalised address are case-insensitive.
"""
import logging
from typing import Optional

from application.exceptions import InvalidOperationError
from application.ports.record_store import RecordStore
from domain.models import User
from infrastructure.db.entity_repository import EntityConfig, EntityRepository
from infrastructure.db.schema import USERS

logger = logging.getLogger(__name__)

USER_CONFIG = EntityConfig(
    table=USERS,
    model=User,
    label="User",
    owner_column="id",
    mutable_fields=frozenset({"email", "name", "last_login_date"}),
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(EntityRepository[User]):
    """User persistence with email lookup and uniqueness checks."""

    def __init__(self, store: RecordStore):
        super().__init__(store, USER_CONFIG)

    async def get_by_email(self, email: str) -> Optional[User]:
        rows = await self._store.find(
            USERS, eq={"email": normalize_email(email)}, limit=1
        )
        return self._from_row(rows[0]) if rows else None

    async def exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def create(self, user: User, owner_id: Optional[str] = None) -> User:
        if await self.exists(user.email):
            raise InvalidOperationError(f"A user with email {user.email} already exists")
        return await super().create(user, owner_id)

    async def update(self, user: User, owner_id: Optional[str] = None) -> User:
        holder = await self.get_by_email(user.email)
        if holder is not None and holder.id != user.id:
            raise InvalidOperationError(f"A user with email {user.email} already exists")
        return await super().update(user, owner_id)
