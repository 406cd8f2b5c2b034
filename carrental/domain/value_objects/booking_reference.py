"""Value Object BookingReference - código que el cliente usa para rastrear su reserva."""

import re
import secrets
import string
from dataclasses import dataclass

from carrental.domain.constants import BOOKING_REFERENCE_PREFIX

CODE_LENGTH = 8
ALPHABET = string.ascii_uppercase + string.digits

_PATTERN = re.compile(rf"^{re.escape(BOOKING_REFERENCE_PREFIX)}[A-Z0-9]+$")


@dataclass(frozen=True)
class BookingReference:
    """
    Formato: "AR-" + 8 caracteres en mayúsculas (ej: AR-7K2M9QXD).

    Es distinto del id interno del registro.
    """

    value: str

    def __post_init__(self) -> None:
        if not _PATTERN.match(self.value):
            raise ValueError(f"Referencia inválida: {self.value!r}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> "BookingReference":
        code = "".join(secrets.choice(ALPHABET) for _ in range(CODE_LENGTH))
        return cls(f"{BOOKING_REFERENCE_PREFIX}{code}")

    @classmethod
    def parse(cls, text: str | None) -> "BookingReference | None":
        """Normaliza lo que captura el usuario; None si no tiene el formato."""
        candidate = (text or "").strip().upper()
        try:
            return cls(candidate)
        except ValueError:
            return None
