"""
Store-backed implementation of CatalogRepository.

One class serves exercise types, metcon types and movement types, each
configured by a CatalogConfig.

Behaviour shared by all catalogs:
- name is required (max 100 chars); category, where present, is required
  (max 50 chars)
- name uniqueness is case-sensitive; on update it is only re-checked when
  the name changed ignoring case, so a case-only rename is not checked
- deactivate() soft-deletes entries still referenced by logged data and
  deletes unreferenced ones
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, TypeVar

from application.exceptions import (
    EntityNotFoundError,
    InvalidOperationError,
)
from application.ports.record_store import RecordStore, Row
from domain.models import CatalogItem, ExerciseType, MetconType, MovementType
from domain.models.catalog import MAX_CATEGORY_LENGTH, MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH
from infrastructure.db.entity_repository import EntityConfig, EntityRepository, FieldRule
from infrastructure.db.schema import (
    EXERCISE_TYPES,
    METCON_MOVEMENTS,
    METCON_TYPES,
    METCON_WORKOUTS,
    MOVEMENT_TYPES,
    STRENGTH_LIFTS,
)

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=CatalogItem)

NAME_RULE = FieldRule(
    "name",
    CatalogItem.has_valid_name,
    f"Name is required and cannot exceed {MAX_NAME_LENGTH} characters",
)
CATEGORY_MESSAGE = f"Category is required and cannot exceed {MAX_CATEGORY_LENGTH} characters"


@dataclass(frozen=True)
class CatalogConfig:
    """Entity configuration plus the tables that reference the catalog."""

    entity: EntityConfig
    referenced_by: Tuple[Tuple[str, str], ...]
    has_category: bool = True


EXERCISE_TYPE_CATALOG = CatalogConfig(
    entity=EntityConfig(
        table=EXERCISE_TYPES,
        model=ExerciseType,
        label="Exercise type",
        generate_id=False,
        rules=(
            NAME_RULE,
            FieldRule("category", ExerciseType.has_valid_category, CATEGORY_MESSAGE),
        ),
        mutable_fields=frozenset({"name", "category", "is_active"}),
    ),
    referenced_by=((STRENGTH_LIFTS, "exercise_type_id"),),
)

METCON_TYPE_CATALOG = CatalogConfig(
    entity=EntityConfig(
        table=METCON_TYPES,
        model=MetconType,
        label="Metcon type",
        generate_id=False,
        rules=(
            NAME_RULE,
            FieldRule(
                "description",
                MetconType.has_valid_description,
                f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters",
            ),
        ),
        mutable_fields=frozenset({"name", "description", "is_active"}),
    ),
    referenced_by=((METCON_WORKOUTS, "metcon_type_id"),),
    has_category=False,
)

MOVEMENT_TYPE_CATALOG = CatalogConfig(
    entity=EntityConfig(
        table=MOVEMENT_TYPES,
        model=MovementType,
        label="Movement type",
        generate_id=False,
        rules=(
            NAME_RULE,
            FieldRule("category", MovementType.has_valid_category, CATEGORY_MESSAGE),
        ),
        mutable_fields=frozenset({"name", "category", "measurement_type", "is_active"}),
    ),
    referenced_by=((METCON_MOVEMENTS, "movement_type_id"),),
)


def _catalog_sort_key(item: CatalogItem):
    return (getattr(item, "category", "") or "", item.name)


class CatalogRepository(EntityRepository[C]):
    """
    Reference catalog persistence.

    Usage:
        exercise_types = CatalogRepository(store, EXERCISE_TYPE_CATALOG)
        squats = await exercise_types.list_by_category("Squat")
    """

    def __init__(self, store: RecordStore, catalog: CatalogConfig):
        super().__init__(store, catalog.entity)
        self._catalog = catalog

    @property
    def label(self) -> str:
        return self._config.label

    async def _find(self, **filters) -> List[C]:
        rows: List[Row] = await self._store.find(self._config.table, **filters)
        return sorted(await self._load(rows), key=_catalog_sort_key)

    async def list_active(self) -> List[C]:
        return await self._find(eq={"is_active": True})

    async def list_all(self) -> List[C]:
        return await self._find()

    async def list_by_category(self, category: str) -> List[C]:
        if not self._catalog.has_category:
            raise InvalidOperationError(f"{self.label}s are not grouped by category")
        return await self._find(eq={"is_active": True, "category": category})

    async def exists_by_name(self, name: str, exclude_id: Optional[int] = None) -> bool:
        rows = await self._store.find(self._config.table, eq={"name": name})
        return any(row["id"] != exclude_id for row in rows)

    async def create(self, item: C, owner_id: Optional[str] = None) -> C:
        self.validate(item)
        if await self.exists_by_name(item.name):
            raise InvalidOperationError(
                f"{self.label} with name '{item.name}' already exists"
            )
        return await super().create(item, owner_id)

    async def update(self, item: C, owner_id: Optional[str] = None) -> C:
        existing = await self.get_by_id(item.id) if item.id is not None else None
        if existing is None:
            raise EntityNotFoundError(f"{self.label} with ID {item.id} not found")
        renamed = existing.name.lower() != item.name.lower()
        if renamed and await self.exists_by_name(item.name, exclude_id=item.id):
            raise InvalidOperationError(
                f"{self.label} with name '{item.name}' already exists"
            )
        return await super().update(item, owner_id)

    async def is_referenced(self, item_id: int) -> bool:
        for table, column in self._catalog.referenced_by:
            if await self._store.find(table, eq={column: item_id}, limit=1):
                return True
        return False

    async def deactivate(self, item_id: int) -> bool:
        """
        Soft-delete a referenced entry, hard-delete an unreferenced one.

        Returns:
            False if the entry does not exist
        """
        row = await self._store.get(self._config.table, item_id)
        if row is None:
            return False
        if await self.is_referenced(item_id):
            await self._store.update(self._config.table, item_id, {"is_active": False})
            logger.info(f"Deactivated {self.label.lower()} {item_id} (in use)")
        else:
            await self._store.delete(self._config.table, item_id)
            logger.info(f"Deleted unused {self.label.lower()} {item_id}")
        return True
