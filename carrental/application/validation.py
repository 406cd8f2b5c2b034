"""Validación del borrador antes de crear una reserva."""

import re
from datetime import date, datetime

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from carrental.domain.entities.draft import BookingDraft, DriveOption
from carrental.domain.errors import ValidationError
from carrental.domain.value_objects.rental_period import parse_date

E164_PATTERN = re.compile(r"^\+\d{7,15}$")

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def is_valid_email(email: str | None) -> bool:
    try:
        _email_adapter.validate_python(normalize_email(email))
    except PydanticValidationError:
        return False
    return True


def is_valid_phone(phone: str | None) -> bool:
    """Número con prefijo de país, ej: +639171234567."""
    compact = re.sub(r"[\s\-()]", "", phone or "")
    return bool(E164_PATTERN.match(compact))


def validate_draft(draft: BookingDraft) -> None:
    """
    Verifica que el borrador pueda convertirse en reserva.

    Raises:
        ValidationError: con el primer campo inválido encontrado.
    """
    renter = draft.renter
    if not renter.full_name.strip():
        raise ValidationError("renter.full_name", "Full name is required")
    if not renter.email.strip():
        raise ValidationError("renter.email", "Email is required")
    if not is_valid_email(renter.email):
        raise ValidationError("renter.email", "Email address is invalid")
    if not renter.phone_number.strip():
        raise ValidationError("renter.phone_number", "Phone number is required")
    if not is_valid_phone(renter.phone_number):
        raise ValidationError(
            "renter.phone_number", "Phone number must include the country code (e.g. +63...)"
        )

    if draft.vehicle is None or not draft.vehicle.id:
        raise ValidationError("vehicle", "Select a vehicle")

    pickup = parse_date(draft.search.pickup_date)
    dropoff = parse_date(draft.search.return_date)
    if pickup is None:
        raise ValidationError("search.pickup_date", "Pickup date is required")
    if dropoff is None:
        raise ValidationError("search.return_date", "Return date is required")
    if _as_comparable(dropoff) < _as_comparable(pickup):
        raise ValidationError("search.return_date", "Return date must not be before pickup date")
    if not draft.search.pickup_location.strip():
        raise ValidationError("search.pickup_location", "Pickup location is required")

    if draft.drive_option == DriveOption.UNSET:
        raise ValidationError("drive_option", "Choose self-drive or with-driver")
    if not draft.terms_agreed:
        raise ValidationError("terms_agreed", "You must agree to the terms and conditions")


def _as_comparable(value: date | datetime) -> date:
    # date y datetime no se comparan entre sí
    return value.date() if isinstance(value, datetime) else value
