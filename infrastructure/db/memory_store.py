"""
In-memory implementation of RecordStore.

Used for local development (DATABASE_BACKEND=memory) and as the backing
store in tests. Rows are deep-copied on the way in and out so callers never
share state with the store.
"""
import copy
import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from application.ports.record_store import RecordId, Row

logger = logging.getLogger(__name__)


def _sort_key(column: str):
    def key(row: Row):
        value = row.get(column)
        return (value is None, value)

    return key


def _matches(
    row: Row,
    eq: Optional[Mapping[str, Any]],
    in_: Optional[Mapping[str, Sequence[Any]]],
    gte: Optional[Mapping[str, Any]],
    lte: Optional[Mapping[str, Any]],
) -> bool:
    for column, value in (eq or {}).items():
        if row.get(column) != value:
            return False
    for column, values in (in_ or {}).items():
        if row.get(column) not in values:
            return False
    for column, bound in (gte or {}).items():
        value = row.get(column)
        if value is None or value < bound:
            return False
    for column, bound in (lte or {}).items():
        value = row.get(column)
        if value is None or value > bound:
            return False
    return True


class InMemoryRecordStore:
    """
    Dict-of-tables RecordStore.

    Integer IDs are generated per table when a row is inserted without one.

    Usage:
        store = InMemoryRecordStore()
        store.seed("exercise_types", [{"id": 1, "name": "Back Squat", ...}])
        row = await store.get("exercise_types", 1)
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[RecordId, Row]] = defaultdict(dict)
        self._sequences: Dict[str, int] = defaultdict(int)

    # =========================================================================
    # Test Helpers
    # =========================================================================

    def reset(self) -> None:
        """Drop every table."""
        self._tables.clear()
        self._sequences.clear()

    def seed(self, table: str, rows: Iterable[Row]) -> None:
        """Load rows synchronously, keeping their IDs."""
        for row in rows:
            self._put(table, copy.deepcopy(dict(row)))

    def get_all(self, table: str) -> List[Row]:
        """Get every row of a table (for assertions)."""
        return [copy.deepcopy(row) for row in self._tables[table].values()]

    def _put(self, table: str, row: Row) -> Row:
        if row.get("id") is None:
            self._sequences[table] += 1
            row["id"] = self._sequences[table]
        elif isinstance(row["id"], int):
            self._sequences[table] = max(self._sequences[table], row["id"])
        if row["id"] in self._tables[table]:
            raise ValueError(f"Duplicate id {row['id']!r} in table {table}")
        self._tables[table][row["id"]] = row
        return row

    # =========================================================================
    # RecordStore
    # =========================================================================

    async def get(self, table: str, record_id: RecordId) -> Optional[Row]:
        row = self._tables[table].get(record_id)
        return copy.deepcopy(row) if row is not None else None

    async def find(
        self,
        table: str,
        *,
        eq: Optional[Mapping[str, Any]] = None,
        in_: Optional[Mapping[str, Sequence[Any]]] = None,
        gte: Optional[Mapping[str, Any]] = None,
        lte: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        rows = [
            row
            for row in self._tables[table].values()
            if _matches(row, eq, in_, gte, lte)
        ]
        if order_by:
            rows.sort(key=_sort_key(order_by), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [copy.deepcopy(row) for row in rows]

    async def insert(self, table: str, values: Row) -> Row:
        row = self._put(table, copy.deepcopy(dict(values)))
        logger.debug(f"Inserted {table} row {row['id']}")
        return copy.deepcopy(row)

    async def update(
        self, table: str, record_id: RecordId, values: Row
    ) -> Optional[Row]:
        row = self._tables[table].get(record_id)
        if row is None:
            return None
        row.update(copy.deepcopy(dict(values)))
        return copy.deepcopy(row)

    async def delete(self, table: str, record_id: RecordId) -> bool:
        return self._tables[table].pop(record_id, None) is not None

    async def delete_where(
        self,
        table: str,
        *,
        eq: Optional[Mapping[str, Any]] = None,
        in_: Optional[Mapping[str, Sequence[Any]]] = None,
    ) -> int:
        doomed = [
            record_id
            for record_id, row in self._tables[table].items()
            if _matches(row, eq, in_, None, None)
        ]
        for record_id in doomed:
            del self._tables[table][record_id]
        return len(doomed)
