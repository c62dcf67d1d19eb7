"""
Generic entity repository.

A single implementation of CRUD, ownership scoping, validation and
session-scoped ordering, parameterised per entity by an EntityConfig:

- rules: validator table run (fail fast) before every write
- owner_column / parent_column: how a row is tied to its owning user,
  either directly (``user_id``) or through the parent workout session
- references: rows that must exist before a create or update
- mutable_fields: the only columns an update may overwrite

Entity repositories (users, sessions, lifts, metcon workouts, catalogs) are
thin subclasses that add their own queries.

Ordering note: create() reads the current maximum ``order`` and writes
max + 1 without a transaction, so two concurrent creates in one session can
both receive the same order value.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import (
    Any,
    Callable,
    Collection,
    Dict,
    FrozenSet,
    Generic,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from pydantic import BaseModel

from application.exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    ReferenceNotFoundError,
)
from application.ports.record_store import RecordId, RecordStore, Row
from infrastructure.db.schema import CASCADES, WORKOUT_SESSIONS

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class FieldRule:
    """A validator predicate and the message raised when it fails."""

    field: str
    check: Callable[[Any], bool]
    message: str


@dataclass(frozen=True)
class Reference:
    """A foreign key that must resolve before a write.

    ``owned`` references must also belong to the caller (the parent
    workout session of a lift, for example).
    """

    column: str
    table: str
    label: str
    owned: bool = False


@dataclass(frozen=True)
class EntityConfig:
    """Per-entity settings for EntityRepository."""

    table: str
    model: Type[BaseModel]
    label: str
    rules: Tuple[FieldRule, ...] = ()
    mutable_fields: FrozenSet[str] = frozenset()
    owner_column: Optional[str] = None
    parent_column: Optional[str] = None
    parent_table: str = WORKOUT_SESSIONS
    date_column: Optional[str] = None
    references: Tuple[Reference, ...] = ()
    generate_id: bool = True
    exclude_fields: FrozenSet[str] = frozenset()


def _date_bounds(
    column: str, start_date: Optional[date], end_date: Optional[date]
) -> Tuple[Optional[Dict[str, str]], Optional[Dict[str, str]]]:
    gte = {column: start_date.isoformat()} if start_date else None
    lte = {column: end_date.isoformat()} if end_date else None
    return gte, lte


# =============================================================================
# Repository
# =============================================================================


class EntityRepository(Generic[T]):
    """
    Store-backed repository for one entity type.

    Usage:
        repo = EntityRepository(store, STRENGTH_LIFT_CONFIG)
        lift = await repo.create(StrengthLift(...), owner_id=user_id)
        await repo.get_by_id(lift.id, owner_id=other_user)  # -> None
    """

    def __init__(self, store: RecordStore, config: EntityConfig):
        """
        Initialize with a record store.

        Args:
            store: Durable store (injected)
            config: Entity configuration
        """
        self._store = store
        self._config = config

    @property
    def config(self) -> EntityConfig:
        return self._config

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _to_row(self, entity: T) -> Row:
        row = entity.model_dump(mode="json", exclude=set(self._config.exclude_fields))
        if row.get("id") is None:
            row.pop("id", None)
        return row

    def _from_row(self, row: Row) -> T:
        return self._config.model.model_validate(row)

    async def _load(self, rows: List[Row]) -> List[T]:
        """Turn rows into entities. Subclasses hydrate related rows here."""
        return [self._from_row(row) for row in rows]

    async def _after_write(self, entity: T, row: Row) -> T:
        """Called after insert/update with the stored row."""
        return self._from_row(row)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, entity: T) -> None:
        """
        Run the validator table against an entity.

        Raises:
            DomainValidationError: On the first failing rule
        """
        for rule in self._config.rules:
            if not rule.check(entity):
                logger.info(f"{self._config.label} rejected: {rule.message}")
                raise DomainValidationError(rule.message, field=rule.field)

    async def _check_references(
        self,
        entity: T,
        owner_id: Optional[str],
        columns: Optional[Collection[str]] = None,
    ) -> None:
        for ref in self._config.references:
            if columns is not None and ref.column not in columns:
                continue
            value = getattr(entity, ref.column)
            if value is None:
                continue
            row = await self._store.get(ref.table, value)
            hidden = (
                row is not None
                and ref.owned
                and owner_id is not None
                and row.get("user_id") != owner_id
            )
            if row is None or hidden:
                raise ReferenceNotFoundError(f"{ref.label} with ID {value} not found")

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    async def _is_owned(self, row: Row, owner_id: str) -> bool:
        cfg = self._config
        if cfg.owner_column:
            return row.get(cfg.owner_column) == owner_id
        if cfg.parent_column:
            parent = await self._store.get(cfg.parent_table, row[cfg.parent_column])
            return parent is not None and parent.get("user_id") == owner_id
        return True

    async def _get_row(
        self, entity_id: RecordId, owner_id: Optional[str] = None
    ) -> Optional[Row]:
        row = await self._store.get(self._config.table, entity_id)
        if row is None:
            return None
        if owner_id is not None and not await self._is_owned(row, owner_id):
            logger.debug(
                f"{self._config.label} {entity_id} hidden from user {owner_id}"
            )
            return None
        return row

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_by_id(
        self, entity_id: RecordId, owner_id: Optional[str] = None
    ) -> Optional[T]:
        """
        Get an entity by ID.

        Args:
            entity_id: Entity ID
            owner_id: Owning user; None skips the ownership filter

        Returns:
            The entity, or None if missing or owned by another user
        """
        row = await self._get_row(entity_id, owner_id)
        if row is None:
            return None
        return (await self._load([row]))[0]

    async def list_by_owner(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        where: Optional[Mapping[str, Any]] = None,
    ) -> List[T]:
        """
        List a user's entities within an inclusive date range.

        Results are sorted by (session) date descending, then ``order``
        ascending.
        """
        cfg = self._config
        if cfg.owner_column and cfg.date_column:
            gte, lte = _date_bounds(cfg.date_column, start_date, end_date)
            rows = await self._store.find(
                cfg.table,
                eq={cfg.owner_column: owner_id, **(where or {})},
                gte=gte,
                lte=lte,
            )
            dates = {row["id"]: row.get(cfg.date_column) for row in rows}
        elif cfg.parent_column:
            gte, lte = _date_bounds("date", start_date, end_date)
            sessions = await self._store.find(
                cfg.parent_table, eq={"user_id": owner_id}, gte=gte, lte=lte
            )
            session_dates = {s["id"]: s.get("date") for s in sessions}
            if not session_dates:
                return []
            rows = await self._store.find(
                cfg.table,
                eq=dict(where or {}),
                in_={cfg.parent_column: list(session_dates)},
            )
            dates = {row["id"]: session_dates.get(row[cfg.parent_column]) for row in rows}
        else:
            raise TypeError(f"{cfg.label} is not listed by owner")

        rows.sort(key=lambda row: row.get("order") or 0)
        rows.sort(key=lambda row: dates.get(row["id"]) or "", reverse=True)
        return await self._load(rows)

    async def list_by_session(self, session_id: str, owner_id: str) -> List[T]:
        """List the entries of one session, ``order`` ascending."""
        cfg = self._config
        session = await self._store.get(cfg.parent_table, session_id)
        if session is None or session.get("user_id") != owner_id:
            return []
        rows = await self._store.find(
            cfg.table, eq={cfg.parent_column: session_id}, order_by="order"
        )
        return await self._load(rows)

    async def get_max_order(self, parent_id: str) -> int:
        """Highest ``order`` among a parent's entries, 0 when there are none."""
        cfg = self._config
        rows = await self._store.find(
            cfg.table,
            eq={cfg.parent_column: parent_id},
            order_by="order",
            descending=True,
            limit=1,
        )
        return int(rows[0].get("order") or 0) if rows else 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, entity: T, owner_id: Optional[str] = None) -> T:
        """
        Validate and persist a new entity.

        Assigns an ID when absent and, for session entries left with
        ``order == 0``, the next order in the session.

        Raises:
            DomainValidationError: If a validator fails
            ReferenceNotFoundError: If a referenced row is missing or not owned
        """
        cfg = self._config
        entity = entity.model_copy(deep=True)
        if cfg.generate_id and getattr(entity, "id", None) is None:
            entity.id = str(uuid.uuid4())
        if owner_id is not None and cfg.owner_column and cfg.owner_column != "id":
            setattr(entity, cfg.owner_column, owner_id)

        self.validate(entity)
        await self._check_references(entity, owner_id)

        if cfg.parent_column and not entity.order:
            parent_id = getattr(entity, cfg.parent_column)
            entity.order = await self.get_max_order(parent_id) + 1

        row = await self._store.insert(cfg.table, self._to_row(entity))
        logger.info(f"Created {cfg.label.lower()} {row.get('id')}")
        return await self._after_write(entity, row)

    async def update(self, entity: T, owner_id: Optional[str] = None) -> T:
        """
        Persist the mutable fields of an existing entity.

        Raises:
            EntityNotFoundError: If the entity does not exist for this owner
            DomainValidationError: If a validator fails
        """
        cfg = self._config
        entity_id = getattr(entity, "id", None)
        existing = await self._get_row(entity_id, owner_id) if entity_id is not None else None
        if existing is None:
            raise EntityNotFoundError(f"{cfg.label} with ID {entity_id} not found")

        self.validate(entity)
        await self._check_references(entity, owner_id, columns=cfg.mutable_fields)

        values = {
            column: value
            for column, value in self._to_row(entity).items()
            if column in cfg.mutable_fields
        }
        row = await self._store.update(cfg.table, entity_id, values)
        if row is None:
            raise EntityNotFoundError(f"{cfg.label} with ID {entity_id} not found")
        logger.info(f"Updated {cfg.label.lower()} {entity_id}")
        return await self._after_write(entity, row)

    async def delete(self, entity_id: RecordId, owner_id: Optional[str] = None) -> bool:
        """
        Delete an entity and its children.

        Returns:
            True if a matching row existed and was removed, False otherwise
        """
        cfg = self._config
        row = await self._get_row(entity_id, owner_id)
        if row is None:
            return False
        await self._delete_children(cfg.table, [row["id"]])
        deleted = await self._store.delete(cfg.table, row["id"])
        if deleted:
            logger.info(f"Deleted {cfg.label.lower()} {entity_id}")
        return deleted

    async def _delete_children(self, table: str, parent_ids: List[RecordId]) -> None:
        for child_table, column in CASCADES.get(table, ()):
            children = await self._store.find(child_table, in_={column: parent_ids})
            if not children:
                continue
            await self._delete_children(child_table, [child["id"] for child in children])
            await self._store.delete_where(child_table, in_={column: parent_ids})
