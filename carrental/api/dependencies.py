from functools import lru_cache
from typing import Any

from fastapi import Depends

from carrental.application.booking_lifecycle import BookingLifecycleManager
from carrental.application.interfaces.clock import SystemClock
from carrental.application.interfaces.persistence import PersistenceService
from carrental.application.interfaces.reference_generator import RealReferenceGenerator
from carrental.application.lead_capture import LeadCaptureService
from carrental.application.use_cases.expire_stale_leads import ExpireStaleLeadsUseCase
from carrental.config import Settings, get_settings
from carrental.infrastructure.db.engine import build_engine, build_sessionmaker
from carrental.infrastructure.db.sql_persistence import SQLPersistenceService
from carrental.infrastructure.in_memory.persistence import InMemoryPersistenceService


@lru_cache(maxsize=1)
def _in_memory_persistence() -> InMemoryPersistenceService:
    return InMemoryPersistenceService()


@lru_cache(maxsize=1)
def _sql_bundle() -> dict[str, Any]:
    settings = get_settings()
    engine = build_engine(settings)
    return {
        "engine": engine,
        "persistence": SQLPersistenceService(build_sessionmaker(engine)),
    }


def get_persistence(settings: Settings = Depends(get_settings)) -> PersistenceService:
    if settings.use_in_memory:
        return _in_memory_persistence()
    return _sql_bundle()["persistence"]


def get_services(
    settings: Settings = Depends(get_settings),
    persistence: PersistenceService = Depends(get_persistence),
) -> dict[str, Any]:
    clock = SystemClock()
    # sin timer de debounce del lado servidor: cada petición guarda de inmediato
    lead_capture = LeadCaptureService(persistence, clock, delay_ms=settings.lead_save_delay_ms)
    return {
        "settings": settings,
        "persistence": persistence,
        "lead_capture": lead_capture,
        "lifecycle": BookingLifecycleManager(
            persistence,
            clock,
            RealReferenceGenerator(),
            lead_capture=lead_capture,
        ),
        "expire_leads": ExpireStaleLeadsUseCase(
            persistence, clock, expiry_minutes=settings.lead_expiry_minutes
        ),
    }


def reset_dependencies() -> None:
    """Limpia los singletons cacheados (para testing)."""
    _in_memory_persistence.cache_clear()
    _sql_bundle.cache_clear()
    get_settings.cache_clear()
