"""Interface DraftStorage - Puerto para el almacenamiento local del borrador."""

from abc import ABC, abstractmethod
from typing import Any


class DraftStorage(ABC):
    """
    Almacén clave -> documento JSON, local a una sesión de navegador.

    No hay coordinación entre sesiones: la última escritura gana.
    """

    @abstractmethod
    def get(self, key: str) -> dict[str, Any] | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, key: str) -> None:
        raise NotImplementedError
