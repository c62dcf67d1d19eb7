"""
Reference catalog service.

One instance per catalog (exercise types, metcon types, movement types).
"""
import logging
from typing import Any, Dict, Generic, List, Optional, TypeVar

from application.exceptions import EntityNotFoundError
from application.ports import CatalogRepository
from domain.models import CatalogItem

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=CatalogItem)


class CatalogService(Generic[C]):
    """List, read and maintain one reference catalog."""

    def __init__(self, catalog: CatalogRepository[C], label: str) -> None:
        self._catalog = catalog
        self._label = label

    @property
    def label(self) -> str:
        return self._label

    async def list_items(
        self, category: Optional[str] = None, include_inactive: bool = False
    ) -> List[C]:
        if category:
            return await self._catalog.list_by_category(category)
        if include_inactive:
            return await self._catalog.list_all()
        return await self._catalog.list_active()

    async def get_item(self, item_id: int) -> C:
        item = await self._catalog.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"{self._label} with ID {item_id} not found")
        return item

    async def create_item(self, item: C) -> C:
        created = await self._catalog.create(item)
        logger.info(f"Added {self._label.lower()} '{created.name}'")
        return created

    async def update_item(self, item_id: int, changes: Dict[str, Any]) -> C:
        existing = await self.get_item(item_id)
        changes = {k: v for k, v in changes.items() if k != "id"}
        updated = type(existing).model_validate({**existing.model_dump(), **changes})
        return await self._catalog.update(updated)

    async def deactivate_item(self, item_id: int) -> bool:
        return await self._catalog.deactivate(item_id)
