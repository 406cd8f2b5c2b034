"""Implementación in-memory del almacenamiento de borradores."""

import copy
from typing import Any

from carrental.application.interfaces.draft_storage import DraftStorage


class InMemoryDraftStorage(DraftStorage):
    """Almacenamiento de borradores en memoria (una pestaña, o testing)."""

    def __init__(self) -> None:
        self._items: dict[str, dict[str, Any]] = {}

    def get(self, key: str) -> dict[str, Any] | None:
        value = self._items.get(key)
        return copy.deepcopy(value) if value is not None else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._items[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)
