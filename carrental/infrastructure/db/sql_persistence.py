"""SQL implementation of the persistence service (SQLAlchemy Core, async)."""

import logging
import uuid
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from carrental.application.interfaces.persistence import (
    ChangeEvent,
    PersistenceService,
    Record,
    Subscription,
)
from carrental.domain.constants import EVENT_DELETE, EVENT_INSERT, EVENT_UPDATE
from carrental.domain.errors import NotFoundError, TransientStoreError
from carrental.infrastructure.db.engine import session_scope
from carrental.infrastructure.db.retry import retry_on_transient_error
from carrental.infrastructure.db.tables import metadata
from carrental.infrastructure.notifications import ChangeNotifier

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class SQLPersistenceService(PersistenceService):
    """
    Maps every collection to a table of the same name.

    Database errors are retried when transient and then surfaced as
    TransientStoreError. Change events are published in-process after commit.
    """

    def __init__(
        self,
        session_maker,
        notifier: ChangeNotifier | None = None,
        max_attempts: int = 3,
        base_delay: float = 0.1,
    ) -> None:
        self._session_maker = session_maker
        self._notifier = notifier or ChangeNotifier()
        self._max_attempts = max_attempts
        self._base_delay = base_delay

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    def _table(self, collection: str) -> Table:
        table = metadata.tables.get(collection)
        if table is None:
            raise ValueError(f"Unknown collection: {collection}")
        return table

    def _values(self, table: Table, record: Mapping[str, Any]) -> dict[str, Any]:
        return {k: _plain(v) for k, v in record.items() if k in table.c}

    def _where(self, table: Table, predicate: Mapping[str, Any] | None) -> list:
        clauses = []
        for key, value in (predicate or {}).items():
            column = table.c[key]
            clauses.append(column.is_(None) if value is None else column == _plain(value))
        return clauses

    async def _run(self, operation: str, collection: str, work):
        try:
            return await retry_on_transient_error(work, self._max_attempts, self._base_delay)
        except SQLAlchemyError as exc:
            logger.error(
                "Store operation failed",
                extra={"operation": operation, "collection": collection, "error": str(exc)},
            )
            raise TransientStoreError(operation, collection, exc.__class__.__name__) from exc

    async def find_one(self, collection: str, predicate: Mapping[str, Any]) -> Record | None:
        table = self._table(collection)
        stmt = select(table).where(*self._where(table, predicate)).limit(1)

        async def work():
            async with session_scope(self._session_maker) as session:
                result = await session.execute(stmt)
                row = result.mappings().first()
                return dict(row) if row else None

        return await self._run("find_one", collection, work)

    async def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        table = self._table(collection)
        values = self._values(table, record)
        values["id"] = values.get("id") or str(uuid.uuid4())

        async def work():
            async with session_scope(self._session_maker) as session:
                await session.execute(insert(table).values(**values))

        await self._run("insert", collection, work)
        self._notifier.publish(ChangeEvent(collection, EVENT_INSERT, values["id"], dict(values)))
        return dict(values)

    async def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> Record:
        table = self._table(collection)
        values = self._values(table, changes)
        values.pop("id", None)

        async def work():
            async with session_scope(self._session_maker) as session:
                if values:
                    await session.execute(update(table).where(table.c.id == record_id).values(**values))
                result = await session.execute(select(table).where(table.c.id == record_id))
                row = result.mappings().first()
                return dict(row) if row else None

        stored = await self._run("update", collection, work)
        if stored is None:
            raise NotFoundError(collection, record_id)
        self._notifier.publish(ChangeEvent(collection, EVENT_UPDATE, record_id, dict(stored)))
        return stored

    async def delete(self, collection: str, record_id: str) -> None:
        table = self._table(collection)

        async def work():
            async with session_scope(self._session_maker) as session:
                result = await session.execute(delete(table).where(table.c.id == record_id))
                return result.rowcount

        deleted = await self._run("delete", collection, work)
        if deleted:
            self._notifier.publish(ChangeEvent(collection, EVENT_DELETE, record_id, {"id": record_id}))

    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Record]:
        table = self._table(collection)
        stmt = select(table).where(*self._where(table, filters))
        if order_by:
            column = table.c[order_by]
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)

        async def work():
            async with session_scope(self._session_maker) as session:
                result = await session.execute(stmt)
                return [dict(row) for row in result.mappings().all()]

        return await self._run("query", collection, work)

    async def subscribe(self, collection: str, event_types: Iterable[str]) -> Subscription:
        self._table(collection)
        return self._notifier.subscribe(collection, event_types)
