"""DTOs para la captura de leads."""

from dataclasses import dataclass
from decimal import Decimal

from carrental.domain.entities.draft import BookingDraft
from carrental.domain.entities.lead import LeadStep
from carrental.domain.pricing import PriceBreakdown


@dataclass
class LeadData:
    """Snapshot parcial del borrador enviado al guardado de leads."""

    email: str = ""
    vehicle_id: str | None = None
    lead_name: str = ""
    phone: str = ""

    pickup_location: str | None = None
    dropoff_location: str | None = None
    pickup_date: str | None = None
    pickup_time: str | None = None
    return_date: str | None = None
    rental_days: int | None = None
    estimated_price: Decimal | None = None
    drive_option: str | None = None

    last_step: LeadStep = LeadStep.RENTER_INFO

    @classmethod
    def from_draft(
        cls,
        draft: BookingDraft,
        pricing: PriceBreakdown | None = None,
        last_step: LeadStep = LeadStep.RENTER_INFO,
    ) -> "LeadData":
        """Construye el snapshot a partir del borrador y, si existe, la cotización."""
        return cls(
            email=draft.renter.email,
            vehicle_id=draft.vehicle.id if draft.vehicle else None,
            lead_name=draft.renter.full_name,
            phone=draft.renter.phone_number,
            pickup_location=draft.search.pickup_location,
            dropoff_location=draft.dropoff_location,
            pickup_date=draft.search.pickup_date,
            pickup_time=draft.search.pickup_time,
            return_date=draft.search.return_date,
            rental_days=pricing.rental_days if pricing else None,
            estimated_price=pricing.total if pricing else None,
            drive_option=draft.drive_option.value,
            last_step=last_step,
        )


@dataclass
class SaveLeadResult:
    """Resultado del upsert de un lead; los errores nunca se propagan."""

    success: bool
    lead_id: str | None = None
    error: str | None = None
