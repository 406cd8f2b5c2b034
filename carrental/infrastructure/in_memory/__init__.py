"""Implementaciones in-memory para testing."""

from carrental.infrastructure.in_memory.draft_storage import InMemoryDraftStorage
from carrental.infrastructure.in_memory.persistence import InMemoryPersistenceService

__all__ = [
    "InMemoryPersistenceService",
    "InMemoryDraftStorage",
]
