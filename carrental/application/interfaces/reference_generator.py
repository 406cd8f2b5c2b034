"""Interface ReferenceGenerator - Puerto para generación de identificadores."""

import uuid
from abc import ABC, abstractmethod

from carrental.domain.constants import BOOKING_REFERENCE_PREFIX
from carrental.domain.value_objects.booking_reference import BookingReference


class ReferenceGenerator(ABC):
    """
    Puerto para generación de identificadores únicos.

    Permite inyectar implementaciones fake para testing determinista.
    """

    @abstractmethod
    def generate_id(self) -> str:
        """Genera un id interno (UUID v4)."""
        raise NotImplementedError

    @abstractmethod
    def generate_booking_reference(self) -> str:
        """Genera la referencia visible al cliente (ej: AR-A1B2C3D4)."""
        raise NotImplementedError


class RealReferenceGenerator(ReferenceGenerator):
    """Implementación real con UUIDs y referencias aleatorias."""

    def generate_id(self) -> str:
        return str(uuid.uuid4())

    def generate_booking_reference(self) -> str:
        return BookingReference.generate().value


class FakeReferenceGenerator(ReferenceGenerator):
    """
    Implementación fake para testing.

    Genera valores predecibles para pruebas deterministas.
    """

    def __init__(self, prefix: str = "TEST"):
        self._prefix = prefix
        self._id_counter = 0
        self._reference_counter = 0

    def generate_id(self) -> str:
        self._id_counter += 1
        hex_value = f"{self._id_counter:032x}"
        return f"{hex_value[:8]}-{hex_value[8:12]}-{hex_value[12:16]}-{hex_value[16:20]}-{hex_value[20:]}"

    def generate_booking_reference(self) -> str:
        self._reference_counter += 1
        return f"{BOOKING_REFERENCE_PREFIX}{self._prefix}{self._reference_counter:04d}"

    def reset(self) -> None:
        """Reinicia todos los contadores."""
        self._id_counter = 0
        self._reference_counter = 0
