"""
Capa de Dominio - Reservas de autos.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.
Incluye entidades, value objects, cotización y excepciones de dominio.

Estructura:
- entities/: Entidades del dominio (Booking, Lead, Payment, BookingDraft, Vehicle)
- value_objects/: Objetos de valor inmutables (Money, BookingReference, RentalPeriod)
- pricing.py: Calculadora de cotizaciones
- errors.py: Excepciones específicas del dominio
- constants.py: Constantes del dominio
"""

from carrental.domain.entities import (
    ALLOWED_TRANSITIONS,
    AutomationStatus,
    Booking,
    BookingDraft,
    BookingStatus,
    DriveOption,
    Lead,
    LeadStatus,
    LeadStep,
    Payment,
    PaymentStatus,
    RefundStatus,
    RenterInfo,
    SearchCriteria,
    Vehicle,
    VehicleRef,
)
from carrental.domain.errors import (
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)
from carrental.domain.pricing import PriceBreakdown, compute_price
from carrental.domain.value_objects import BookingReference, Money, RentalPeriod

__all__ = [
    # Entities
    "Booking",
    "BookingStatus",
    "RefundStatus",
    "ALLOWED_TRANSITIONS",
    "BookingDraft",
    "DriveOption",
    "RenterInfo",
    "SearchCriteria",
    "VehicleRef",
    "Lead",
    "LeadStatus",
    "LeadStep",
    "AutomationStatus",
    "Payment",
    "PaymentStatus",
    "Vehicle",
    # Pricing
    "PriceBreakdown",
    "compute_price",
    # Value Objects
    "Money",
    "BookingReference",
    "RentalPeriod",
    # Errors
    "DomainError",
    "ValidationError",
    "TransientStoreError",
    "NotFoundError",
    "InvalidTransitionError",
]
