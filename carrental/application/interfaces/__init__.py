"""Interfaces (Puertos) de la capa de aplicación."""

from carrental.application.interfaces.clock import Clock, FakeClock, SystemClock
from carrental.application.interfaces.draft_storage import DraftStorage
from carrental.application.interfaces.persistence import (
    ChangeEvent,
    PersistenceService,
    Record,
    Subscription,
)
from carrental.application.interfaces.reference_generator import (
    FakeReferenceGenerator,
    RealReferenceGenerator,
    ReferenceGenerator,
)

__all__ = [
    # Persistence
    "PersistenceService",
    "Subscription",
    "ChangeEvent",
    "Record",
    # Storage
    "DraftStorage",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "ReferenceGenerator",
    "RealReferenceGenerator",
    "FakeReferenceGenerator",
]
