"""Cálculo de cotización: parámetros del viaje -> desglose de costos."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from carrental.domain.constants import CURRENCY_CODE, DRIVER_FEE, LOCATION_FEES
from carrental.domain.entities.draft import DriveOption
from carrental.domain.value_objects.money import Money
from carrental.domain.value_objects.rental_period import RentalPeriod

_FEES_BY_KEY = {name.casefold(): fee for name, fee in LOCATION_FEES.items()}


def location_fee(location: str | None) -> Decimal:
    """Tarifa de un tramo; lugar vacío o desconocido no cobra."""
    if not location:
        return Decimal("0")
    return _FEES_BY_KEY.get(location.strip().casefold(), Decimal("0"))


@dataclass(frozen=True)
class LineItem:
    label: str
    amount: Money
    payable: bool = True


@dataclass(frozen=True)
class PriceBreakdown:
    """
    Desglose de una cotización.

    `driver_fee` es informativo: se paga directo al conductor y nunca forma
    parte de `total`.
    """

    rental_days: int
    price_per_day: Decimal
    car_base_price: Decimal
    pickup_location_fee: Decimal
    dropoff_location_fee: Decimal
    driver_fee: Decimal
    total: Decimal
    currency_code: str = CURRENCY_CODE

    @property
    def location_fees(self) -> Decimal:
        return self.pickup_location_fee + self.dropoff_location_fee

    @property
    def total_money(self) -> Money:
        return Money(amount=self.total, currency_code=self.currency_code)

    @property
    def has_driver_fee(self) -> bool:
        return self.driver_fee > 0

    def line_items(self) -> list[LineItem]:
        """Líneas para recibo o pantalla; la del conductor va marcada como no pagadera."""
        day_label = "day" if self.rental_days == 1 else "days"
        items = [
            LineItem(
                f"Car base price ({self.rental_days} {day_label})",
                Money(self.car_base_price, self.currency_code),
            ),
        ]
        if self.pickup_location_fee:
            items.append(LineItem("Pickup fee", Money(self.pickup_location_fee, self.currency_code)))
        if self.dropoff_location_fee:
            items.append(
                LineItem("Drop-off fee", Money(self.dropoff_location_fee, self.currency_code))
            )
        if self.has_driver_fee:
            items.append(
                LineItem("Pay to driver", Money(self.driver_fee, self.currency_code), payable=False)
            )
        return items

    def payable_total(self) -> Money:
        """Suma de las líneas pagaderas; coincide con `total`."""
        total = Money(Decimal("0"), self.currency_code)
        for item in self.line_items():
            if item.payable:
                total = total + item.amount
        return total


def compute_price(
    vehicle_price_per_day: Decimal | int | str,
    pickup_date: date | datetime | str | None,
    return_date: date | datetime | str | None,
    pickup_location: str | None,
    dropoff_location: str | None,
    drive_option: DriveOption | str | None,
    *,
    driver_fee: Decimal = DRIVER_FEE,
) -> PriceBreakdown:
    price_per_day = Decimal(str(vehicle_price_per_day or 0))
    rental_days = RentalPeriod.from_values(pickup_date, return_date).rental_days

    car_base_price = price_per_day * rental_days
    pickup_fee = location_fee(pickup_location)
    dropoff_fee = location_fee(dropoff_location)
    fee = driver_fee if DriveOption.parse(drive_option) == DriveOption.WITH_DRIVER else Decimal("0")

    return PriceBreakdown(
        rental_days=rental_days,
        price_per_day=price_per_day,
        car_base_price=car_base_price,
        pickup_location_fee=pickup_fee,
        dropoff_location_fee=dropoff_fee,
        driver_fee=fee,
        total=car_base_price + pickup_fee + dropoff_fee,
    )
