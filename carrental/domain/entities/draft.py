"""Entidad BookingDraft - reserva en captura, propiedad del cliente."""

from dataclasses import asdict, dataclass, field, fields
from decimal import Decimal
from enum import Enum
from typing import Any


class DriveOption(str, Enum):
    """Modalidad de renta; solo afecta la tarifa del conductor."""

    UNSET = ""
    SELF_DRIVE = "self-drive"
    WITH_DRIVER = "with-driver"

    @classmethod
    def parse(cls, value: "str | DriveOption | None") -> "DriveOption":
        if isinstance(value, DriveOption):
            return value
        try:
            return cls(value or "")
        except ValueError:
            return cls.UNSET


@dataclass
class VehicleRef:
    """Vehículo seleccionado (lo necesario para cotizar y reservar)."""

    id: str
    name: str = ""
    price_per_day: Decimal = Decimal("0")
    category: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.price_per_day, Decimal):
            self.price_per_day = Decimal(str(self.price_per_day))


@dataclass
class RenterInfo:
    """Datos de contacto del arrendatario."""

    full_name: str = ""
    email: str = ""
    phone_number: str = ""  # con prefijo de país, ej: +639171234567


@dataclass
class SearchCriteria:
    """Criterios de búsqueda capturados en el formulario (texto ISO)."""

    pickup_location: str = ""
    dropoff_location: str = ""
    pickup_date: str = ""
    return_date: str = ""
    pickup_time: str = ""


REQUIRED_RENTER_FIELDS = ("full_name", "email", "phone_number")
REQUIRED_SEARCH_FIELDS = ("pickup_location", "pickup_date", "return_date")


@dataclass
class BookingDraft:
    """
    Borrador de reserva que vive solo en la sesión del navegador.

    Se crea al seleccionar vehículo, se modifica campo por campo y se
    descarta al crear la reserva.
    """

    vehicle: VehicleRef | None = None
    renter: RenterInfo = field(default_factory=RenterInfo)
    search: SearchCriteria = field(default_factory=SearchCriteria)
    drive_option: DriveOption = DriveOption.UNSET
    terms_agreed: bool = False

    # === Propiedades calculadas ===

    @property
    def dropoff_location(self) -> str:
        """Si no se eligió lugar de entrega se devuelve en el de recogida."""
        return self.search.dropoff_location or self.search.pickup_location

    def missing_fields(self) -> list[str]:
        """Lista los campos requeridos que siguen vacíos."""
        missing: list[str] = []
        if self.vehicle is None or not self.vehicle.id:
            missing.append("vehicle")
        for name in REQUIRED_RENTER_FIELDS:
            if not str(getattr(self.renter, name) or "").strip():
                missing.append(f"renter.{name}")
        for name in REQUIRED_SEARCH_FIELDS:
            if not str(getattr(self.search, name) or "").strip():
                missing.append(f"search.{name}")
        if self.drive_option == DriveOption.UNSET:
            missing.append("drive_option")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    # === Serialización ===

    def to_dict(self) -> dict[str, Any]:
        vehicle = None
        if self.vehicle is not None:
            vehicle = asdict(self.vehicle)
            vehicle["price_per_day"] = str(self.vehicle.price_per_day)
        return {
            "vehicle": vehicle,
            "renter": asdict(self.renter),
            "search": asdict(self.search),
            "drive_option": self.drive_option.value,
            "terms_agreed": self.terms_agreed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "BookingDraft":
        if not data:
            return cls()
        vehicle_data = data.get("vehicle")
        return cls(
            vehicle=VehicleRef(**_known(VehicleRef, vehicle_data)) if vehicle_data else None,
            renter=RenterInfo(**_known(RenterInfo, data.get("renter"))),
            search=SearchCriteria(**_known(SearchCriteria, data.get("search"))),
            drive_option=DriveOption.parse(data.get("drive_option")),
            terms_agreed=bool(data.get("terms_agreed", False)),
        )


def _known(cls: type, data: dict[str, Any] | None) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}
