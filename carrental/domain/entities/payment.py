"""Entidad Payment - pago registrado contra una reserva."""

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable

from carrental.domain.value_objects.money import Money


class PaymentStatus(str, Enum):
    """Estados posibles de un pago (señal externa, no calculada aquí)."""

    PENDING = "pending"
    PAID = "paid"
    COMPLETED = "completed"
    REFUNDED = "refunded"
    FAILED = "failed"


class PaymentType(str, Enum):
    FULL = "full"
    DOWNPAYMENT = "downpayment"


SETTLED_STATUSES = frozenset({PaymentStatus.PAID, PaymentStatus.COMPLETED})


@dataclass
class Payment:
    """
    Pago asociado a exactamente una reserva.

    El estado de pago efectivo de una reserva es el del pago más reciente.
    """

    id: str | None = None
    booking_id: str = ""
    amount: Decimal = Decimal("0")
    payment_type: PaymentType = PaymentType.FULL
    payment_method: str = "cash"
    payment_status: PaymentStatus = PaymentStatus.PENDING
    receipt_url: str | None = None
    payment_proof_url: str | None = None
    created_at: datetime | None = None

    @property
    def money(self) -> Money:
        return Money(amount=self.amount)

    @property
    def is_settled(self) -> bool:
        return self.payment_status in SETTLED_STATUSES

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Payment":
        names = {f.name for f in fields(cls)}
        data = {k: v for k, v in record.items() if k in names}
        data["payment_status"] = PaymentStatus(data.get("payment_status") or PaymentStatus.PENDING)
        data["payment_type"] = PaymentType(data.get("payment_type") or PaymentType.FULL)
        if data.get("amount") is not None:
            data["amount"] = Decimal(str(data["amount"]))
        return cls(**data)


def latest_payment(payments: Iterable[Payment]) -> Payment | None:
    """Retorna el pago más reciente (por created_at; a igualdad, el último insertado)."""
    latest: Payment | None = None
    for payment in payments:
        if latest is None or latest.created_at is None:
            latest = payment
        elif payment.created_at is not None and payment.created_at >= latest.created_at:
            latest = payment
    return latest
