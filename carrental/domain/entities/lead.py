"""Entidad Lead - borrador abandonado persistido para seguimiento."""

from dataclasses import dataclass, fields
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class LeadStatus(str, Enum):
    """Estados posibles de un lead."""

    PENDING = "pending"
    RECOVERED = "recovered"
    EXPIRED = "expired"


class LeadStep(str, Enum):
    """Paso más avanzado alcanzado en el flujo de reserva."""

    DATE_SELECTION = "date_selection"
    RENTER_INFO = "renter_info"
    PAYMENT = "payment"

    @property
    def rank(self) -> int:
        return _STEP_ORDER.index(self)

    @classmethod
    def furthest(cls, *steps: "LeadStep | str | None") -> "LeadStep | None":
        """Retorna el paso más avanzado; ignora valores vacíos o desconocidos."""
        known = []
        for step in steps:
            try:
                known.append(cls(step))
            except ValueError:
                continue
        return max(known, key=lambda s: s.rank) if known else None


_STEP_ORDER = (LeadStep.DATE_SELECTION, LeadStep.RENTER_INFO, LeadStep.PAYMENT)


class AutomationStatus(str, Enum):
    """Estado del correo de recuperación (lo controla el mailer externo)."""

    NOT_SENT = "not_sent"
    SENT = "sent"
    OPENED = "opened"
    CLICKED = "clicked"


@dataclass
class Lead:
    """
    Lead identificado por (email, vehicle_id); el id es solo sustituto.

    Un lead recuperado ya no acepta cambios desde la captura del formulario.
    """

    id: str | None = None
    lead_name: str = ""
    email: str = ""
    phone: str = ""
    vehicle_id: str | None = None

    pickup_location: str | None = None
    dropoff_location: str | None = None
    pickup_date: date | None = None
    pickup_time: str | None = None
    return_date: date | None = None
    rental_days: int | None = None
    estimated_price: Decimal | None = None
    drive_option: str | None = None

    last_step: LeadStep = LeadStep.RENTER_INFO
    drop_off_timestamp: datetime | None = None
    status: LeadStatus = LeadStatus.PENDING
    automation_status: AutomationStatus = AutomationStatus.NOT_SENT
    recovered_booking_id: str | None = None
    created_at: datetime | None = None

    @property
    def is_recovered(self) -> bool:
        return self.status == LeadStatus.RECOVERED

    def is_stale(self, cutoff: datetime) -> bool:
        """Pendiente y sin actividad desde antes de `cutoff`."""
        if self.status != LeadStatus.PENDING or self.drop_off_timestamp is None:
            return False
        timestamp = self.drop_off_timestamp
        if (timestamp.tzinfo is None) != (cutoff.tzinfo is None):
            # algunos motores devuelven fechas sin zona horaria (UTC implícito)
            timestamp, cutoff = timestamp.replace(tzinfo=None), cutoff.replace(tzinfo=None)
        return timestamp < cutoff

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Lead":
        names = {f.name for f in fields(cls)}
        data = {k: v for k, v in record.items() if k in names}
        data["last_step"] = LeadStep.furthest(data.get("last_step")) or LeadStep.RENTER_INFO
        data["status"] = LeadStatus(data.get("status") or LeadStatus.PENDING)
        data["automation_status"] = AutomationStatus(
            data.get("automation_status") or AutomationStatus.NOT_SENT
        )
        return cls(**data)
