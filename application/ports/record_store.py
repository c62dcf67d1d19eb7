"""
Record Store Interface (Port).

This module defines the durable-store interface the repositories are built
on. A store holds named tables of JSON-like rows keyed by ``id``; it offers
point lookup, filtered range queries, insert, update and delete.

Implementations:
- infrastructure.db.SupabaseRecordStore (PostgREST via the Supabase client)
- infrastructure.db.InMemoryRecordStore (development and tests)
"""
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union

Row = Dict[str, Any]
RecordId = Union[str, int]


class RecordStore(Protocol):
    """
    Abstract interface for table-oriented persistence.

    All methods are coroutines. Infrastructure failures propagate to the
    caller; "not found" is reported through return values.
    """

    async def get(self, table: str, record_id: RecordId) -> Optional[Row]:
        """
        Get a single row by primary key.

        Args:
            table: Table name
            record_id: Row ID

        Returns:
            The row, or None if it does not exist
        """
        ...

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
        """
        Query rows matching every given filter.

        Args:
            table: Table name
            eq: Column equality filters
            in_: Column membership filters
            gte: Inclusive lower bounds
            lte: Inclusive upper bounds
            order_by: Column to sort by
            descending: Sort direction
            limit: Maximum number of rows

        Returns:
            Matching rows (empty list when none match)
        """
        ...

    async def insert(self, table: str, values: Row) -> Row:
        """
        Insert a row and return it as stored (including generated IDs).
        """
        ...

    async def update(
        self, table: str, record_id: RecordId, values: Row
    ) -> Optional[Row]:
        """
        Update columns of an existing row.

        Returns:
            The updated row, or None if no row has that ID
        """
        ...

    async def delete(self, table: str, record_id: RecordId) -> bool:
        """
        Delete a row by primary key.

        Returns:
            True if a row was removed, False if it did not exist
        """
        ...

    async def delete_where(
        self,
        table: str,
        *,
        eq: Optional[Mapping[str, Any]] = None,
        in_: Optional[Mapping[str, Sequence[Any]]] = None,
    ) -> int:
        """
        Delete every row matching the filters.

        Returns:
            Number of rows removed
        """
        ...
