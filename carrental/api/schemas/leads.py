from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from carrental.application.dtos.lead_dto import LeadData
from carrental.domain.entities.lead import LeadStep


class LeadRequest(BaseModel):
    """Snapshot parcial del formulario; el correo puede estar incompleto."""

    model_config = ConfigDict(extra="forbid")

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

    def to_lead_data(self) -> LeadData:
        return LeadData(**self.model_dump())


class LeadResponse(BaseModel):
    success: bool
    lead_id: str | None = None
    error: str | None = None
