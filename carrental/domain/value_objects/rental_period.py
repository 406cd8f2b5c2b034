"""Value Object RentalPeriod - fechas de recogida y devolución."""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

SECONDS_PER_DAY = 86400


def parse_date(value: date | datetime | str | None) -> date | datetime | None:
    """Convierte texto ISO a fecha; texto vacío o inválido se trata como ausente."""
    if value is None or isinstance(value, (date, datetime)):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        if "T" in text or " " in text:
            return datetime.fromisoformat(text)
        return date.fromisoformat(text)
    except ValueError:
        return None


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return datetime(value.year, value.month, value.day)


@dataclass(frozen=True)
class RentalPeriod:
    """
    Value Object inmutable con el rango de renta.

    A diferencia de un rango estricto, acepta fechas faltantes (modo cotización)
    y devolución igual a la recogida.

    Attributes:
        pickup: Fecha (u hora) de recogida.
        dropoff: Fecha (u hora) de devolución.
    """

    pickup: date | datetime | None
    dropoff: date | datetime | None

    @property
    def is_complete(self) -> bool:
        return self.pickup is not None and self.dropoff is not None

    @property
    def duration(self) -> timedelta | None:
        if not self.is_complete:
            return None
        return _as_datetime(self.dropoff) - _as_datetime(self.pickup)

    @property
    def rental_days(self) -> int:
        """
        Días a cobrar.

        Regla de negocio: cualquier fracción de día cuenta como día completo y
        el mínimo es 1 (incluye recogida y devolución el mismo día).
        """
        duration = self.duration
        if duration is None:
            return 1
        days = math.ceil(abs(duration.total_seconds()) / SECONDS_PER_DAY)
        return max(1, days)

    @classmethod
    def from_values(
        cls,
        pickup: date | datetime | str | None,
        dropoff: date | datetime | str | None,
    ) -> "RentalPeriod":
        return cls(pickup=parse_date(pickup), dropoff=parse_date(dropoff))
