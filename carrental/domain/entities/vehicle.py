from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any

from carrental.domain.constants import VEHICLE_CATEGORY_ORDER
from carrental.domain.entities.draft import VehicleRef


@dataclass
class Vehicle:
    id: str
    name: str = ""
    brand: str = ""
    model: str = ""
    category: str = ""
    price_per_day: Decimal = Decimal("0")

    @property
    def category_rank(self) -> int:
        category = (self.category or "").lower()
        if category in VEHICLE_CATEGORY_ORDER:
            return VEHICLE_CATEGORY_ORDER.index(category)
        return len(VEHICLE_CATEGORY_ORDER)

    @property
    def display_name(self) -> str:
        return self.name or f"{self.brand} {self.model}".strip()

    def to_ref(self) -> VehicleRef:
        return VehicleRef(
            id=self.id,
            name=self.display_name,
            price_per_day=self.price_per_day,
            category=self.category,
        )

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Vehicle":
        names = {f.name for f in fields(cls)}
        data = {k: v for k, v in record.items() if k in names}
        data["price_per_day"] = Decimal(str(data.get("price_per_day") or 0))
        return cls(**data)
