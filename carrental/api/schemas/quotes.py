from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, condecimal

from carrental.domain.entities.draft import DriveOption
from carrental.domain.pricing import PriceBreakdown

Money = condecimal(max_digits=12, decimal_places=2)


class QuoteRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    vehicle_price_per_day: Money = Field(ge=0)
    pickup_date: date | datetime | None = None
    return_date: date | datetime | None = None
    pickup_location: str | None = None
    dropoff_location: str | None = None
    drive_option: DriveOption = DriveOption.UNSET


class LineItemSchema(BaseModel):
    label: str
    amount: Decimal
    formatted: str
    payable: bool


class QuoteResponse(BaseModel):
    rental_days: int
    price_per_day: Decimal
    car_base_price: Decimal
    pickup_location_fee: Decimal
    dropoff_location_fee: Decimal
    driver_fee: Decimal
    total: Decimal
    total_formatted: str
    currency_code: str
    line_items: list[LineItemSchema]

    @classmethod
    def from_breakdown(cls, breakdown: PriceBreakdown) -> "QuoteResponse":
        return cls(
            rental_days=breakdown.rental_days,
            price_per_day=breakdown.price_per_day,
            car_base_price=breakdown.car_base_price,
            pickup_location_fee=breakdown.pickup_location_fee,
            dropoff_location_fee=breakdown.dropoff_location_fee,
            driver_fee=breakdown.driver_fee,
            total=breakdown.total,
            total_formatted=breakdown.total_money.format(),
            currency_code=breakdown.currency_code,
            line_items=[
                LineItemSchema(
                    label=item.label,
                    amount=item.amount.amount,
                    formatted=item.amount.format(),
                    payable=item.payable,
                )
                for item in breakdown.line_items()
            ],
        )
