from fastapi import APIRouter, Depends, status

from carrental.api.dependencies import get_services
from carrental.api.schemas.bookings import (
    BookingResponse,
    CreateBookingRequest,
    CreateBookingResponse,
    TrackingResponse,
)
from carrental.api.schemas.leads import LeadRequest, LeadResponse
from carrental.api.schemas.quotes import QuoteRequest, QuoteResponse
from carrental.application.dtos.booking_dto import PaymentInput
from carrental.domain.constants import VEHICLES
from carrental.domain.entities.draft import BookingDraft, RenterInfo, SearchCriteria
from carrental.domain.entities.vehicle import Vehicle
from carrental.domain.errors import NotFoundError
from carrental.domain.pricing import compute_price

router = APIRouter()


@router.post("/quotes", response_model=QuoteResponse)
async def create_quote(payload: QuoteRequest, services=Depends(get_services)) -> QuoteResponse:
    breakdown = compute_price(
        payload.vehicle_price_per_day,
        payload.pickup_date,
        payload.return_date,
        payload.pickup_location,
        payload.dropoff_location,
        payload.drive_option,
        driver_fee=services["settings"].driver_fee,
    )
    return QuoteResponse.from_breakdown(breakdown)


@router.post("/leads", response_model=LeadResponse, status_code=status.HTTP_202_ACCEPTED)
async def save_lead(payload: LeadRequest, services=Depends(get_services)) -> LeadResponse:
    result = await services["lead_capture"].save_or_update_lead(payload.to_lead_data())
    return LeadResponse(success=result.success, lead_id=result.lead_id, error=result.error)


@router.post(
    "/bookings",
    response_model=CreateBookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: CreateBookingRequest,
    services=Depends(get_services),
) -> CreateBookingResponse:
    record = await services["persistence"].find_one(VEHICLES, {"id": payload.vehicle_id})
    if record is None:
        raise NotFoundError("Vehicle", payload.vehicle_id)
    vehicle = Vehicle.from_record(record)

    trip = payload.trip
    draft = BookingDraft(
        vehicle=vehicle.to_ref(),
        renter=RenterInfo(**payload.renter.model_dump()),
        search=SearchCriteria(
            pickup_location=trip.pickup_location,
            dropoff_location=trip.dropoff_location or "",
            pickup_date=trip.pickup_date.isoformat(),
            return_date=trip.return_date.isoformat(),
            pickup_time=trip.pickup_time or "",
        ),
        drive_option=payload.drive_option,
        terms_agreed=payload.terms_agreed,
    )
    pricing = compute_price(
        vehicle.price_per_day,
        trip.pickup_date,
        trip.return_date,
        draft.search.pickup_location,
        draft.dropoff_location,
        draft.drive_option,
        driver_fee=services["settings"].driver_fee,
    )
    payment = None
    if payload.payment is not None:
        payment = PaymentInput(**payload.payment.model_dump())

    result = await services["lifecycle"].create_booking(draft, pricing, payment)
    if not result.success:
        raise result.error
    return CreateBookingResponse(
        booking=BookingResponse.from_entity(result.booking),
        quote=QuoteResponse.from_breakdown(pricing),
    )


@router.get("/bookings/{booking_reference}", response_model=TrackingResponse)
async def track_booking(booking_reference: str, services=Depends(get_services)) -> TrackingResponse:
    lifecycle = services["lifecycle"]
    booking = await lifecycle.get_by_reference(booking_reference)
    if booking is None:
        raise NotFoundError("Booking", booking_reference)
    payment_status = await lifecycle.latest_payment_status(booking.id)
    return TrackingResponse(
        booking=BookingResponse.from_entity(booking),
        payment_status=payment_status.value if payment_status else None,
    )
