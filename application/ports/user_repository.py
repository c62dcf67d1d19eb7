"""
User Repository Interface (Port).

Implemented by infrastructure.db.UserRepository and, transparently, by the
read-through infrastructure.caching.CachedUserRepository.
"""
from typing import Optional, Protocol, runtime_checkable

from domain.models import User


@runtime_checkable
class UserRepository(Protocol):
    """
    Abstract interface for user persistence.

    Email lookups are case-insensitive.
    """

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get a user by ID.

        Returns:
            The user, or None if not found
        """
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get a user by email address (case-insensitive).

        Returns:
            The user, or None if not found
        """
        ...

    async def create(self, user: User) -> User:
        """
        Create a user.

        Returns:
            The stored user including its generated ID

        Raises:
            InvalidOperationError: If the email is already registered
        """
        ...

    async def update(self, user: User) -> User:
        """
        Update name, email and last login of an existing user.

        Raises:
            EntityNotFoundError: If the user does not exist
        """
        ...

    async def delete(self, user_id: str) -> bool:
        """
        Delete a user and everything they own.

        Returns:
            True if the user existed and was removed
        """
        ...

    async def exists(self, email: str) -> bool:
        """Check whether an email address is registered."""
        ...
