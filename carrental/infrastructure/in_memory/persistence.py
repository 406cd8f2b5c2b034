"""Implementación in-memory del servicio de persistencia."""

import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from carrental.application.interfaces.persistence import (
    ChangeEvent,
    PersistenceService,
    Record,
    Subscription,
)
from carrental.domain.constants import EVENT_DELETE, EVENT_INSERT, EVENT_UPDATE
from carrental.domain.errors import NotFoundError
from carrental.infrastructure.notifications import ChangeNotifier


def _matches(record: Record, predicate: Mapping[str, Any] | None) -> bool:
    return all(record.get(key) == value for key, value in (predicate or {}).items())


def _sort_key(field_name: str):
    def key(record: Record) -> Any:
        value = record.get(field_name)
        return (value is not None, value if value is not None else 0)

    return key


class InMemoryPersistenceService(PersistenceService):
    """
    Implementación in-memory para desarrollo y testing.

    Conserva el orden de inserción y publica un evento por cada escritura.
    """

    def __init__(self, notifier: ChangeNotifier | None = None) -> None:
        self._collections: dict[str, dict[str, Record]] = {}
        self._notifier = notifier or ChangeNotifier()

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    def _table(self, collection: str) -> dict[str, Record]:
        return self._collections.setdefault(collection, {})

    async def find_one(self, collection: str, predicate: Mapping[str, Any]) -> Record | None:
        """Retorna una copia del primer registro que coincida."""
        for record in self._table(collection).values():
            if _matches(record, predicate):
                return dict(record)
        return None

    async def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        """Inserta un registro; genera el id si no viene."""
        stored = dict(record)
        stored["id"] = stored.get("id") or str(uuid.uuid4())
        self._table(collection)[stored["id"]] = stored
        self._notifier.publish(ChangeEvent(collection, EVENT_INSERT, stored["id"], dict(stored)))
        return dict(stored)

    async def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> Record:
        table = self._table(collection)
        if record_id not in table:
            raise NotFoundError(collection, record_id)
        stored = table[record_id]
        stored.update({k: v for k, v in changes.items() if k != "id"})
        self._notifier.publish(ChangeEvent(collection, EVENT_UPDATE, record_id, dict(stored)))
        return dict(stored)

    async def delete(self, collection: str, record_id: str) -> None:
        removed = self._table(collection).pop(record_id, None)
        if removed is not None:
            self._notifier.publish(ChangeEvent(collection, EVENT_DELETE, record_id, dict(removed)))

    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Record]:
        records = [dict(r) for r in self._table(collection).values() if _matches(r, filters)]
        if order_by:
            records.sort(key=_sort_key(order_by), reverse=descending)
        end = None if limit is None else offset + limit
        return records[offset:end]

    async def subscribe(self, collection: str, event_types: Iterable[str]) -> Subscription:
        return self._notifier.subscribe(collection, event_types)

    def clear(self) -> None:
        """Limpia todos los registros (para testing)."""
        self._collections.clear()

    def count(self, collection: str) -> int:
        return len(self._table(collection))
