"""
User account service.

Registration only ever creates a new account. Existing accounts are
signed in through ``login``, which the API calls only after the caller's
identity token has been verified.
"""
import logging
from typing import Optional

from application.exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    InvalidOperationError,
)
from application.ports import UserRepository
from domain.models import User

logger = logging.getLogger(__name__)


class UserService:
    """
    Account operations for the authenticated user.

    Usage:
        >>> service = UserService(users=CachedUserRepository(UserRepository(store), cache))
        >>> user = await service.register("lifter@example.com", "Lifter")
    """

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    async def register(self, email: str, name: str) -> User:
        """
        Create a new account and record its first login.

        Raises:
            InvalidOperationError: If the email already belongs to an account
        """
        if await self._users.exists(email):
            raise InvalidOperationError("An account with this email already exists")
        user = await self._users.create(User(email=email, name=name))
        logger.info(f"Registered user {user.id}")
        user.record_login()
        return await self._users.update(user)

    async def login(self, email: str, name: str) -> User:
        """Get or create the user for a verified email, then record the login."""
        user = await self._users.get_by_email(email)
        if user is None:
            user = await self._users.create(User(email=email, name=name))
            logger.info(f"Registered user {user.id} on first sign-in")
        user.record_login()
        return await self._users.update(user)

    async def get_profile(self, user_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(f"User with ID {user_id} not found")
        return user

    async def update_profile(
        self,
        user_id: str,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        user = await self.get_profile(user_id)
        changes = {}
        if name is not None:
            changes["name"] = name
        if email is not None:
            changes["email"] = email
        if not changes:
            return user
        updated = User.model_validate({**user.model_dump(), **changes})
        return await self._users.update(updated)

    async def is_email_available(self, email: str) -> bool:
        """
        Raises:
            DomainValidationError: If the email is blank
        """
        if not email or not email.strip():
            raise DomainValidationError("Email is required", field="email")
        return not await self._users.exists(email)

    async def delete_account(self, user_id: str) -> bool:
        deleted = await self._users.delete(user_id)
        if deleted:
            logger.info(f"Deleted account {user_id}")
        return deleted
