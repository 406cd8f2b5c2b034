"""Entidad Booking - Agregado raíz del ciclo de vida de una reserva."""

from dataclasses import dataclass, fields
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from carrental.domain.errors import InvalidTransitionError
from carrental.domain.value_objects.money import Money


class BookingStatus(str, Enum):
    """Estados posibles de una reserva."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUND_PENDING = "refund_pending"
    REFUNDED = "refunded"


class RefundStatus(str, Enum):
    """Estado del reembolso; solo tiene sentido en refund_pending/refunded."""

    NONE = "none"
    PENDING = "pending"
    COMPLETED = "completed"


ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.REFUND_PENDING}
    ),
    BookingStatus.CANCELLED: frozenset({BookingStatus.REFUND_PENDING}),
    BookingStatus.REFUND_PENDING: frozenset({BookingStatus.REFUNDED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.REFUNDED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


@dataclass
class Booking:
    """
    Entidad principal del dominio - Agregado Raíz.

    Identificada por `booking_reference` (visible al cliente) y por `id` (interno).
    """

    # Identificadores
    id: str | None = None
    booking_reference: str = ""

    # Referencias externas
    customer_id: str | None = None
    vehicle_id: str | None = None

    # Viaje
    pickup_date: date | None = None
    return_date: date | None = None
    pickup_time: str | None = None
    rental_days: int = 1
    pickup_location: str = ""
    dropoff_location: str = ""
    drive_option: str | None = None

    # Financieros
    total_amount: Decimal = Decimal("0")

    # Estados
    booking_status: BookingStatus = BookingStatus.PENDING
    refund_status: RefundStatus = RefundStatus.NONE
    refund_reference_id: str | None = None
    refund_proof_url: str | None = None
    cancellation_reason: str | None = None

    agreed_to_terms: bool = False

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Propiedades calculadas ===

    @property
    def total(self) -> Money:
        return Money(amount=self.total_amount)

    @property
    def is_terminal(self) -> bool:
        return self.booking_status in TERMINAL_STATUSES

    def can_transition_to(self, target: BookingStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.booking_status]

    # === Métodos de negocio ===

    def transition_to(self, target: BookingStatus | str) -> None:
        """
        Aplica un cambio de estado validado contra la tabla de transiciones.

        Raises:
            InvalidTransitionError: si el cambio no está permitido. El estado
                no se modifica.
        """
        try:
            target = BookingStatus(target)
        except ValueError:
            raise InvalidTransitionError(self.booking_status.value, str(target)) from None
        if not self.can_transition_to(target):
            raise InvalidTransitionError(self.booking_status.value, target.value)

        self.booking_status = target
        if target == BookingStatus.REFUND_PENDING:
            self.refund_status = RefundStatus.PENDING
        elif target == BookingStatus.REFUNDED:
            self.refund_status = RefundStatus.COMPLETED

    def accept(self) -> None:
        """Confirma una reserva pendiente."""
        self.transition_to(BookingStatus.CONFIRMED)

    def decline(self, reason: str | None = None) -> None:
        """Rechaza una reserva pendiente."""
        if self.booking_status != BookingStatus.PENDING:
            raise InvalidTransitionError(self.booking_status.value, BookingStatus.CANCELLED.value)
        self.cancel(reason=reason)

    def complete(self) -> None:
        """Marca la renta como terminada."""
        self.transition_to(BookingStatus.COMPLETED)

    def cancel(self, reason: str | None = None, with_refund: bool = False) -> None:
        """
        Cancela la reserva; con reembolso continúa a refund_pending.

        Una reserva ya cancelada se rechaza con (cancelled -> cancelled);
        para reembolsarla se usa initiate_refund.
        """
        self.transition_to(BookingStatus.CANCELLED)
        self.cancellation_reason = reason or self.cancellation_reason
        self.refund_status = RefundStatus.NONE
        if with_refund:
            self.transition_to(BookingStatus.REFUND_PENDING)

    def initiate_refund(self, refund_reference_id: str | None = None) -> None:
        """Inicia el reembolso desde confirmed o cancelled."""
        self.transition_to(BookingStatus.REFUND_PENDING)
        if refund_reference_id:
            self.refund_reference_id = refund_reference_id

    def attach_refund_proof(self, refund_reference_id: str, proof_url: str | None = None) -> None:
        """Registra el comprobante de un reembolso en curso."""
        if self.booking_status != BookingStatus.REFUND_PENDING:
            raise InvalidTransitionError(
                self.booking_status.value, BookingStatus.REFUND_PENDING.value
            )
        self.refund_reference_id = refund_reference_id
        if proof_url:
            self.refund_proof_url = proof_url

    def confirm_refund(self) -> None:
        """Cierra el reembolso."""
        self.transition_to(BookingStatus.REFUNDED)

    # === Persistencia ===

    def to_record(self) -> dict[str, Any]:
        record = {f.name: getattr(self, f.name) for f in fields(self)}
        record["booking_status"] = self.booking_status.value
        record["refund_status"] = self.refund_status.value
        if record["id"] is None:
            record.pop("id")
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Booking":
        names = {f.name for f in fields(cls)}
        data = {k: v for k, v in record.items() if k in names}
        data["booking_status"] = BookingStatus(data.get("booking_status") or BookingStatus.PENDING)
        data["refund_status"] = RefundStatus(data.get("refund_status") or RefundStatus.NONE)
        if data.get("total_amount") is not None:
            data["total_amount"] = Decimal(str(data["total_amount"]))
        return cls(**data)
