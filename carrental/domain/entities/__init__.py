"""Entidades del dominio de reservas."""

from carrental.domain.entities.booking import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    Booking,
    BookingStatus,
    RefundStatus,
)
from carrental.domain.entities.draft import (
    BookingDraft,
    DriveOption,
    RenterInfo,
    SearchCriteria,
    VehicleRef,
)
from carrental.domain.entities.lead import AutomationStatus, Lead, LeadStatus, LeadStep
from carrental.domain.entities.payment import Payment, PaymentStatus, PaymentType, latest_payment
from carrental.domain.entities.vehicle import Vehicle

__all__ = [
    # Booking
    "Booking",
    "BookingStatus",
    "RefundStatus",
    "ALLOWED_TRANSITIONS",
    "TERMINAL_STATUSES",
    # Draft
    "BookingDraft",
    "DriveOption",
    "RenterInfo",
    "SearchCriteria",
    "VehicleRef",
    # Lead
    "Lead",
    "LeadStatus",
    "LeadStep",
    "AutomationStatus",
    # Payment
    "Payment",
    "PaymentStatus",
    "PaymentType",
    "latest_payment",
    # Vehicle
    "Vehicle",
]
