"""
Supabase implementation of RecordStore.

All PostgREST query logic lives here; repositories only speak the
RecordStore interface. The async client is injected via constructor and
created once at application startup.

Errors from Supabase are logged with the table involved and re-raised so
the API layer can answer with a 500.
"""
import logging
from typing import Any, List, Mapping, Optional, Sequence

from supabase import AsyncClient

from application.ports.record_store import RecordId, Row

logger = logging.getLogger(__name__)


def _log_store_error(action: str, table: str, error: Exception) -> None:
    logger.error(f"Failed to {action} {table}: {error}")
    message = str(error)
    if "PGRST" in message or "row-level security" in message.lower():
        logger.error(
            "RLS/Permissions error: Consider using SUPABASE_SERVICE_ROLE_KEY "
            "instead of SUPABASE_ANON_KEY for backend API"
        )


def _apply_filters(
    query,
    eq: Optional[Mapping[str, Any]] = None,
    in_: Optional[Mapping[str, Sequence[Any]]] = None,
    gte: Optional[Mapping[str, Any]] = None,
    lte: Optional[Mapping[str, Any]] = None,
):
    for column, value in (eq or {}).items():
        query = query.eq(column, value)
    for column, values in (in_ or {}).items():
        query = query.in_(column, list(values))
    for column, value in (gte or {}).items():
        query = query.gte(column, value)
    for column, value in (lte or {}).items():
        query = query.lte(column, value)
    return query


class SupabaseRecordStore:
    """
    Supabase implementation of the RecordStore protocol.

    Every table is expected to have an ``id`` primary key column.
    """

    def __init__(self, client: AsyncClient):
        """
        Initialize with Supabase client.

        Args:
            client: Async Supabase client instance (injected, not global)
        """
        self._client = client

    async def get(self, table: str, record_id: RecordId) -> Optional[Row]:
        try:
            result = await (
                self._client.table(table)
                .select("*")
                .eq("id", record_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            _log_store_error(f"get row {record_id} from", table, e)
            raise
        return result.data[0] if result.data else None

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
        # PostgREST rejects an empty IN list; no value can match it anyway
        if in_ and any(len(values) == 0 for values in in_.values()):
            return []
        try:
            query = _apply_filters(
                self._client.table(table).select("*"), eq, in_, gte, lte
            )
            if order_by:
                query = query.order(order_by, desc=descending)
            if limit is not None:
                query = query.limit(limit)
            result = await query.execute()
        except Exception as e:
            _log_store_error("query", table, e)
            raise
        return result.data or []

    async def insert(self, table: str, values: Row) -> Row:
        try:
            result = await self._client.table(table).insert(values).execute()
        except Exception as e:
            _log_store_error("insert into", table, e)
            raise
        if not result.data:
            raise RuntimeError(f"Insert into {table} returned no row")
        logger.info(f"Inserted {table} row {result.data[0].get('id')}")
        return result.data[0]

    async def update(
        self, table: str, record_id: RecordId, values: Row
    ) -> Optional[Row]:
        try:
            result = await (
                self._client.table(table).update(values).eq("id", record_id).execute()
            )
        except Exception as e:
            _log_store_error(f"update row {record_id} in", table, e)
            raise
        return result.data[0] if result.data else None

    async def delete(self, table: str, record_id: RecordId) -> bool:
        try:
            result = await self._client.table(table).delete().eq("id", record_id).execute()
        except Exception as e:
            _log_store_error(f"delete row {record_id} from", table, e)
            raise
        return bool(result.data)

    async def delete_where(
        self,
        table: str,
        *,
        eq: Optional[Mapping[str, Any]] = None,
        in_: Optional[Mapping[str, Sequence[Any]]] = None,
    ) -> int:
        if not eq and not in_:
            raise ValueError("delete_where requires at least one filter")
        if in_ and any(len(values) == 0 for values in in_.values()):
            return 0
        try:
            query = _apply_filters(self._client.table(table).delete(), eq, in_)
            result = await query.execute()
        except Exception as e:
            _log_store_error("delete from", table, e)
            raise
        return len(result.data or [])
