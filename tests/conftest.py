"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Persistencia in-memory y SQLite in-memory (aiosqlite)
- Reloj y generador de referencias deterministas
- Servicios de aplicación ya cableados
- Cliente HTTP de prueba (httpx + ASGITransport)
- Datos de prueba (vehículos, borradores, cotizaciones)
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from carrental.application.booking_lifecycle import BookingLifecycleManager
from carrental.application.interfaces.clock import FakeClock
from carrental.application.interfaces.reference_generator import FakeReferenceGenerator
from carrental.application.lead_capture import LeadCaptureService
from carrental.domain.constants import VEHICLES
from carrental.domain.entities.draft import (
    BookingDraft,
    DriveOption,
    RenterInfo,
    SearchCriteria,
    VehicleRef,
)
from carrental.domain.pricing import compute_price
from carrental.infrastructure.db.engine import build_sessionmaker
from carrental.infrastructure.db.sql_persistence import SQLPersistenceService
from carrental.infrastructure.db.tables import metadata
from carrental.infrastructure.in_memory.persistence import InMemoryPersistenceService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

FIXED_NOW = datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc)


# ============================================================================
# FIXTURES DE INFRAESTRUCTURA
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def reference_generator() -> FakeReferenceGenerator:
    return FakeReferenceGenerator()


@pytest.fixture
def persistence() -> InMemoryPersistenceService:
    return InMemoryPersistenceService()


@pytest_asyncio.fixture
async def sql_persistence():
    """
    SQLPersistenceService sobre SQLite in-memory.
    Las tablas se crean y se destruyen por test.
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield SQLPersistenceService(build_sessionmaker(engine), base_delay=0)

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


# ============================================================================
# FIXTURES DE SERVICIOS
# ============================================================================


@pytest.fixture
def lead_capture(persistence, clock) -> LeadCaptureService:
    return LeadCaptureService(persistence, clock, delay_ms=50)


@pytest.fixture
def lifecycle(persistence, clock, reference_generator, lead_capture) -> BookingLifecycleManager:
    return BookingLifecycleManager(
        persistence, clock, reference_generator, lead_capture=lead_capture
    )


# ============================================================================
# FIXTURES DE DATOS DE PRUEBA
# ============================================================================


@pytest.fixture
def vehicle_record() -> dict:
    return {
        "id": "V1",
        "name": "Toyota Vios",
        "brand": "Toyota",
        "model": "Vios",
        "category": "sedan",
        "price_per_day": Decimal("4300"),
    }


@pytest_asyncio.fixture
async def seeded_vehicle(persistence, vehicle_record) -> dict:
    return await persistence.insert(VEHICLES, vehicle_record)


@pytest.fixture
def complete_draft() -> BookingDraft:
    """Borrador listo para convertirse en reserva."""
    return BookingDraft(
        vehicle=VehicleRef(id="V1", name="Toyota Vios", price_per_day=Decimal("4300"), category="sedan"),
        renter=RenterInfo(
            full_name="Maria Santos",
            email="a@b.com",
            phone_number="+639171234567",
        ),
        search=SearchCriteria(
            pickup_location="Cebu City",
            dropoff_location="AR Car Rentals Office",
            pickup_date="2026-02-10",
            return_date="2026-02-12",
            pickup_time="09:00",
        ),
        drive_option=DriveOption.SELF_DRIVE,
        terms_agreed=True,
    )


@pytest.fixture
def complete_pricing(complete_draft):
    return compute_price(
        complete_draft.vehicle.price_per_day,
        complete_draft.search.pickup_date,
        complete_draft.search.return_date,
        complete_draft.search.pickup_location,
        complete_draft.dropoff_location,
        complete_draft.drive_option,
    )


# ============================================================================
# FIXTURES DE CLIENTE HTTP
# ============================================================================


@pytest_asyncio.fixture
async def api_client(persistence):
    """
    Cliente HTTP contra la app con la persistencia de test inyectada.
    """
    from carrental.api.dependencies import get_persistence
    from carrental.main import app

    app.dependency_overrides[get_persistence] = lambda: persistence
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
