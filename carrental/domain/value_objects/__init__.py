"""Value Objects del dominio de reservas."""

from carrental.domain.value_objects.booking_reference import BookingReference
from carrental.domain.value_objects.money import Money
from carrental.domain.value_objects.rental_period import RentalPeriod, parse_date

__all__ = [
    "BookingReference",
    "Money",
    "RentalPeriod",
    "parse_date",
]
