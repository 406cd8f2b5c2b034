"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from carrental.application.dtos.booking_dto import BookingResult, PaymentInput
from carrental.application.dtos.lead_dto import LeadData, SaveLeadResult

__all__ = [
    # Lead DTOs
    "LeadData",
    "SaveLeadResult",
    # Booking DTOs
    "PaymentInput",
    "BookingResult",
]
