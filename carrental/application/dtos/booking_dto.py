"""DTOs para reservas."""

from dataclasses import dataclass
from decimal import Decimal

from carrental.domain.entities.booking import Booking
from carrental.domain.entities.payment import PaymentType
from carrental.domain.errors import DomainError


@dataclass
class PaymentInput:
    """Información de pago capturada en el checkout (el cobro es externo)."""

    amount: Decimal
    payment_method: str = "cash"
    payment_type: PaymentType = PaymentType.FULL
    payment_proof_url: str | None = None


@dataclass
class BookingResult:
    """
    Resultado de una operación del ciclo de vida.

    En caso de falla, `error` conserva la excepción de dominio para mostrar
    el motivo específico.
    """

    success: bool
    booking: Booking | None = None
    error: DomainError | None = None

    @property
    def booking_id(self) -> str | None:
        return self.booking.id if self.booking else None

    @property
    def booking_reference(self) -> str | None:
        return self.booking.booking_reference if self.booking else None

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error else None

    @classmethod
    def ok(cls, booking: Booking) -> "BookingResult":
        return cls(success=True, booking=booking)

    @classmethod
    def failed(cls, error: DomainError, booking: Booking | None = None) -> "BookingResult":
        return cls(success=False, booking=booking, error=error)
