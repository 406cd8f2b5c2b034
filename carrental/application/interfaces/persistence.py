"""Interface PersistenceService - Puerto hacia el almacén remoto de registros."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

Record = dict[str, Any]


@dataclass(frozen=True)
class ChangeEvent:
    """Notificación de cambio sobre una colección."""

    collection: str
    event_type: str  # INSERT | UPDATE | DELETE
    record_id: str | None
    record: Record = field(default_factory=dict)


class Subscription(ABC):
    """
    Flujo de eventos de cambio.

    Se consume con `async for` y se cierra con `close()` al desmontar la vista.
    """

    def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        return self

    @abstractmethod
    async def __anext__(self) -> ChangeEvent:
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Cancela la suscripción; el iterador termina."""
        raise NotImplementedError


class PersistenceService(ABC):
    """
    Puerto para el servicio de persistencia (única fuente de verdad).

    Todas las fallas de lectura/escritura se reportan como TransientStoreError.
    """

    @abstractmethod
    async def find_one(self, collection: str, predicate: Mapping[str, Any]) -> Record | None:
        """
        Busca el primer registro cuyos campos coincidan con `predicate`.

        Args:
            collection: Nombre de la colección.
            predicate: Igualdades campo -> valor.

        Returns:
            El registro o None si no existe.
        """
        raise NotImplementedError

    @abstractmethod
    async def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        """
        Inserta un registro.

        Returns:
            El registro guardado, incluyendo su `id`.
        """
        raise NotImplementedError

    @abstractmethod
    async def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> Record:
        """
        Actualiza parcialmente un registro por id.

        Raises:
            NotFoundError: si el registro no existe.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> None:
        """Elimina un registro por id (borrado definitivo)."""
        raise NotImplementedError

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Record]:
        """
        Consulta filtrada y ordenada.

        Args:
            filters: Igualdades campo -> valor.
            order_by: Campo de orden.
            descending: Orden descendente.
            limit: Máximo de registros.
            offset: Registros a saltar.
        """
        raise NotImplementedError

    @abstractmethod
    async def subscribe(self, collection: str, event_types: Iterable[str]) -> Subscription:
        """Abre un flujo de notificaciones para los tipos de evento indicados."""
        raise NotImplementedError
