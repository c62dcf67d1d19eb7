"""
Catalog Repository Interface (Port).

One interface serves the three reference catalogs (exercise types, metcon
types, movement types). Name uniqueness is case-sensitive.
"""
from typing import List, Optional, Protocol, TypeVar, runtime_checkable

from domain.models import CatalogItem

C = TypeVar("C", bound=CatalogItem)


@runtime_checkable
class CatalogRepository(Protocol[C]):
    """Abstract interface for reference catalog persistence."""

    async def get_by_id(self, item_id: int) -> Optional[C]:
        ...

    async def list_active(self) -> List[C]:
        """Active entries sorted by category, then name."""
        ...

    async def list_all(self) -> List[C]:
        """All entries including deactivated ones."""
        ...

    async def list_by_category(self, category: str) -> List[C]:
        """Active entries in one category, sorted by name."""
        ...

    async def exists_by_name(self, name: str, exclude_id: Optional[int] = None) -> bool:
        ...

    async def create(self, item: C) -> C:
        """
        Create an entry.

        Raises:
            DomainValidationError: If name or category is missing or too long
            InvalidOperationError: If the name is already taken
        """
        ...

    async def update(self, item: C) -> C:
        """
        Update an entry.

        Raises:
            EntityNotFoundError: If the entry does not exist
        """
        ...

    async def deactivate(self, item_id: int) -> bool:
        """
        Remove an entry from use.

        Entries still referenced by logged data are soft-deleted (marked
        inactive); unreferenced entries are deleted.

        Returns:
            True if the entry existed
        """
        ...
