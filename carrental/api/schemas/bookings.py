from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, condecimal

from carrental.domain.entities.booking import Booking, BookingStatus, RefundStatus
from carrental.domain.entities.draft import DriveOption
from carrental.domain.entities.payment import PaymentType
from carrental.api.schemas.quotes import QuoteResponse

Money = condecimal(max_digits=12, decimal_places=2)


class RenterSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    full_name: str
    email: EmailStr
    phone_number: str


class TripSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pickup_location: str
    dropoff_location: str | None = None
    pickup_date: date
    return_date: date
    pickup_time: str | None = None


class PaymentSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: Money = Field(gt=0)
    payment_method: str = "cash"
    payment_type: PaymentType = PaymentType.FULL
    payment_proof_url: str | None = None


class CreateBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    vehicle_id: str
    renter: RenterSchema
    trip: TripSchema
    drive_option: DriveOption
    terms_agreed: bool
    payment: PaymentSchema | None = None


class BookingResponse(BaseModel):
    id: str
    booking_reference: str
    vehicle_id: str | None
    pickup_date: date | None
    return_date: date | None
    pickup_time: str | None
    rental_days: int
    pickup_location: str
    dropoff_location: str
    drive_option: str | None
    total_amount: Decimal
    booking_status: BookingStatus
    refund_status: RefundStatus
    refund_reference_id: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            booking_reference=booking.booking_reference,
            vehicle_id=booking.vehicle_id,
            pickup_date=booking.pickup_date,
            return_date=booking.return_date,
            pickup_time=booking.pickup_time,
            rental_days=booking.rental_days,
            pickup_location=booking.pickup_location,
            dropoff_location=booking.dropoff_location,
            drive_option=booking.drive_option,
            total_amount=booking.total_amount,
            booking_status=booking.booking_status,
            refund_status=booking.refund_status,
            refund_reference_id=booking.refund_reference_id,
            cancellation_reason=booking.cancellation_reason,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class CreateBookingResponse(BaseModel):
    booking: BookingResponse
    quote: QuoteResponse


class TrackingResponse(BaseModel):
    booking: BookingResponse
    payment_status: str | None = None
