"""Cargadores, definiciones y estadísticas de las listas del panel de administración."""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from carrental.application.interfaces.persistence import PersistenceService, Record
from carrental.domain.constants import BOOKINGS, CUSTOMERS, LEADS, PAYMENTS, VEHICLES
from carrental.domain.entities.booking import BookingStatus
from carrental.domain.entities.lead import LeadStatus
from carrental.domain.entities.payment import PaymentStatus, SETTLED_STATUSES
from carrental.domain.entities.vehicle import Vehicle

Row = dict[str, Any]
Loader = Callable[[PersistenceService], Awaitable[list[Row]]]


@dataclass(frozen=True)
class ListSpec:
    """
    Definición declarativa de una lista del panel.

    Attributes:
        name: Nombre de la lista.
        collections: Colecciones cuyos cambios disparan una recarga.
        tabs: Pestaña -> estados incluidos (None = todos).
        status_field: Campo de la fila que se compara contra la pestaña.
        search_fields: Campos donde se busca el texto libre.
        sort_key: Clave de orden de las filas.
        descending: Orden descendente (más reciente primero).
    """

    name: str
    collections: tuple[str, ...]
    tabs: Mapping[str, frozenset[str] | None]
    status_field: str
    search_fields: tuple[str, ...]
    sort_key: Callable[[Row], Any]
    descending: bool = True

    def matches_tab(self, row: Row, tab: str) -> bool:
        statuses = self.tabs.get(tab)
        if statuses is None:
            return True
        return row.get(self.status_field) in statuses

    def matches_search(self, row: Row, text: str) -> bool:
        needle = text.strip().casefold()
        if not needle:
            return True
        return any(needle in str(row.get(name) or "").casefold() for name in self.search_fields)


def _recent_first(field_name: str) -> Callable[[Row], Any]:
    def key(row: Row) -> Any:
        value = row.get(field_name)
        return (value is not None, str(value) if value is not None else "")

    return key


def _vehicle_order(row: Row) -> Any:
    return (row["category_rank"], (row.get("name") or "").casefold())


def _statuses(*values) -> frozenset[str]:
    return frozenset(v.value for v in values)


BOOKINGS_SPEC = ListSpec(
    name="bookings",
    collections=(BOOKINGS, PAYMENTS, CUSTOMERS, VEHICLES),
    tabs={
        "all": None,
        "pending": _statuses(BookingStatus.PENDING),
        "confirmed": _statuses(BookingStatus.CONFIRMED),
        "completed": _statuses(BookingStatus.COMPLETED),
        "cancelled": _statuses(BookingStatus.CANCELLED),
        "refunds": _statuses(BookingStatus.REFUND_PENDING, BookingStatus.REFUNDED),
    },
    status_field="booking_status",
    search_fields=("booking_reference", "customer_name", "customer_email"),
    sort_key=_recent_first("created_at"),
)

LEADS_SPEC = ListSpec(
    name="leads",
    collections=(LEADS, VEHICLES),
    tabs={
        "all": None,
        "pending": _statuses(LeadStatus.PENDING),
        "recovered": _statuses(LeadStatus.RECOVERED),
        "expired": _statuses(LeadStatus.EXPIRED),
    },
    status_field="status",
    search_fields=("lead_name", "email", "phone", "vehicle_name"),
    sort_key=_recent_first("drop_off_timestamp"),
)

INVOICES_SPEC = ListSpec(
    name="invoices",
    collections=(PAYMENTS, BOOKINGS, CUSTOMERS),
    tabs={
        "all": None,
        "pending": _statuses(PaymentStatus.PENDING),
        "paid": _statuses(PaymentStatus.PAID, PaymentStatus.COMPLETED),
        "refunded": _statuses(PaymentStatus.REFUNDED),
        "failed": _statuses(PaymentStatus.FAILED),
    },
    status_field="payment_status",
    search_fields=("id", "booking_reference", "customer_name", "customer_email"),
    sort_key=_recent_first("created_at"),
)

VEHICLES_SPEC = ListSpec(
    name="vehicles",
    collections=(VEHICLES,),
    tabs={"all": None},
    status_field="category",
    search_fields=("name", "brand", "model", "category"),
    sort_key=_vehicle_order,
    descending=False,
)


# === Cargadores ===


async def _index(persistence: PersistenceService, collection: str) -> dict[str, Record]:
    return {record["id"]: record for record in await persistence.query(collection)}


async def load_bookings(persistence: PersistenceService) -> list[Row]:
    """Reservas con los datos del cliente y del vehículo."""
    customers = await _index(persistence, CUSTOMERS)
    vehicles = await _index(persistence, VEHICLES)
    rows = []
    for booking in await persistence.query(BOOKINGS):
        customer = customers.get(booking.get("customer_id"), {})
        vehicle = vehicles.get(booking.get("vehicle_id"))
        rows.append(
            {
                **booking,
                "customer_name": customer.get("full_name"),
                "customer_email": customer.get("email"),
                "customer_phone": customer.get("contact_number"),
                "vehicle_name": Vehicle.from_record(vehicle).display_name if vehicle else None,
            }
        )
    return rows


async def load_leads(persistence: PersistenceService) -> list[Row]:
    vehicles = await _index(persistence, VEHICLES)
    rows = []
    for lead in await persistence.query(LEADS):
        vehicle = vehicles.get(lead.get("vehicle_id"))
        rows.append(
            {**lead, "vehicle_name": Vehicle.from_record(vehicle).display_name if vehicle else None}
        )
    return rows


async def load_invoices(persistence: PersistenceService) -> list[Row]:
    """Un renglón por pago, con la referencia de la reserva y el cliente."""
    bookings = await _index(persistence, BOOKINGS)
    customers = await _index(persistence, CUSTOMERS)
    rows = []
    for payment in await persistence.query(PAYMENTS):
        booking = bookings.get(payment.get("booking_id"), {})
        customer = customers.get(booking.get("customer_id"), {})
        rows.append(
            {
                **payment,
                "booking_reference": booking.get("booking_reference"),
                "customer_name": customer.get("full_name"),
                "customer_email": customer.get("email"),
            }
        )
    return rows


async def load_vehicles(persistence: PersistenceService) -> list[Row]:
    rows = []
    for record in await persistence.query(VEHICLES):
        vehicle = Vehicle.from_record(record)
        rows.append({**record, "name": vehicle.display_name, "category_rank": vehicle.category_rank})
    return rows


# === Estadísticas ===


def _amount(value: Any) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


@dataclass
class BookingStats:
    total: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    total_revenue: Decimal = Decimal("0")

    def count(self, status: BookingStatus) -> int:
        return self.by_status.get(status.value, 0)


@dataclass
class InvoiceStats:
    total_revenue: Decimal = Decimal("0")
    pending_invoices: int = 0
    refunds_issued: Decimal = Decimal("0")


@dataclass
class LeadStats:
    total: int = 0
    pending: int = 0
    recovered: int = 0
    expired: int = 0

    @property
    def conversion_rate(self) -> Decimal:
        """Porcentaje de leads recuperados, a un decimal."""
        if not self.total:
            return Decimal("0.0")
        return (Decimal(self.recovered) * 100 / self.total).quantize(Decimal("0.1"))


def booking_stats(rows: list[Row]) -> BookingStats:
    stats = BookingStats(total=len(rows))
    for row in rows:
        status = row.get("booking_status")
        stats.by_status[status] = stats.by_status.get(status, 0) + 1
        stats.total_revenue += _amount(row.get("total_amount"))
    return stats


def invoice_stats(rows: list[Row]) -> InvoiceStats:
    settled = {s.value for s in SETTLED_STATUSES}
    stats = InvoiceStats()
    for row in rows:
        status = row.get("payment_status")
        if status in settled:
            stats.total_revenue += _amount(row.get("amount"))
        elif status == PaymentStatus.PENDING.value:
            stats.pending_invoices += 1
        elif status == PaymentStatus.REFUNDED.value:
            stats.refunds_issued += _amount(row.get("amount"))
    return stats


def lead_stats(rows: list[Row]) -> LeadStats:
    stats = LeadStats(total=len(rows))
    for row in rows:
        status = row.get("status")
        if status == LeadStatus.PENDING.value:
            stats.pending += 1
        elif status == LeadStatus.RECOVERED.value:
            stats.recovered += 1
        elif status == LeadStatus.EXPIRED.value:
            stats.expired += 1
    return stats
