import logging
from datetime import date, datetime

from carrental.application.dtos.booking_dto import BookingResult, PaymentInput
from carrental.application.interfaces.clock import Clock
from carrental.application.interfaces.persistence import PersistenceService
from carrental.application.interfaces.reference_generator import ReferenceGenerator
from carrental.application.lead_capture import LeadCaptureService
from carrental.application.validation import normalize_email, validate_draft
from carrental.domain.constants import BOOKINGS, CUSTOMERS, PAYMENTS, VEHICLES
from carrental.domain.entities.booking import Booking, BookingStatus, RefundStatus
from carrental.domain.entities.draft import BookingDraft, RenterInfo
from carrental.domain.entities.payment import PaymentStatus
from carrental.domain.errors import DomainError, NotFoundError, ValidationError
from carrental.domain.pricing import PriceBreakdown
from carrental.domain.value_objects.rental_period import parse_date

logger = logging.getLogger(__name__)


def _as_date(value: str) -> date | None:
    parsed = parse_date(value)
    if isinstance(parsed, datetime):
        return parsed.date()
    return parsed


class CreateBookingUseCase:
    """
    Converts a completed draft into a pending booking.

    The writes are not atomic: a failure after the booking insert leaves the
    booking in place and is reported on the result.
    """

    def __init__(
        self,
        persistence: PersistenceService,
        clock: Clock,
        reference_generator: ReferenceGenerator,
        lead_capture: LeadCaptureService | None = None,
    ) -> None:
        self._persistence = persistence
        self._clock = clock
        self._reference_generator = reference_generator
        self._lead_capture = lead_capture

    async def execute(
        self,
        draft: BookingDraft,
        pricing: PriceBreakdown,
        payment: PaymentInput | None = None,
    ) -> BookingResult:
        try:
            validate_draft(draft)
        except ValidationError as exc:
            logger.info("Booking rejected", extra={"field": exc.field, "error": exc.message})
            return BookingResult.failed(exc)

        booking: Booking | None = None
        inserted = False
        try:
            vehicle_id = draft.vehicle.id
            vehicle = await self._persistence.find_one(VEHICLES, {"id": vehicle_id})
            if vehicle is None:
                raise NotFoundError("Vehicle", vehicle_id)

            customer_id = await self._find_or_create_customer(draft.renter)

            now = self._clock.now()
            booking = Booking(
                id=self._reference_generator.generate_id(),
                booking_reference=self._reference_generator.generate_booking_reference(),
                customer_id=customer_id,
                vehicle_id=vehicle_id,
                pickup_date=_as_date(draft.search.pickup_date),
                return_date=_as_date(draft.search.return_date),
                pickup_time=draft.search.pickup_time or None,
                rental_days=pricing.rental_days,
                pickup_location=draft.search.pickup_location,
                dropoff_location=draft.dropoff_location,
                drive_option=draft.drive_option.value,
                total_amount=pricing.total,
                booking_status=BookingStatus.PENDING,
                refund_status=RefundStatus.NONE,
                agreed_to_terms=draft.terms_agreed,
                created_at=now,
                updated_at=now,
            )
            saved = await self._persistence.insert(BOOKINGS, booking.to_record())
            booking.id = saved["id"]
            inserted = True

            if payment is not None:
                await self._persistence.insert(
                    PAYMENTS,
                    {
                        "booking_id": booking.id,
                        "amount": payment.amount,
                        "payment_type": payment.payment_type.value,
                        "payment_method": payment.payment_method,
                        "payment_status": PaymentStatus.PENDING.value,
                        "payment_proof_url": payment.payment_proof_url,
                        "created_at": now,
                    },
                )
        except DomainError as exc:
            logger.error(
                "Booking creation failed",
                extra={
                    "vehicle_id": draft.vehicle.id,
                    "booking_id": booking.id if booking else None,
                    "error_code": exc.code,
                    "error": exc.message,
                },
            )
            return BookingResult.failed(exc, booking if inserted else None)

        logger.info(
            "Booking created",
            extra={
                "booking_id": booking.id,
                "booking_reference": booking.booking_reference,
                "total_amount": str(booking.total_amount),
            },
        )

        await self._recover_lead(draft, booking)
        return BookingResult.ok(booking)

    async def _find_or_create_customer(self, renter: RenterInfo) -> str:
        email = normalize_email(renter.email)
        existing = await self._persistence.find_one(CUSTOMERS, {"email": email})
        if existing is not None:
            return existing["id"]
        created = await self._persistence.insert(
            CUSTOMERS,
            {
                "full_name": renter.full_name.strip(),
                "email": email,
                "contact_number": renter.phone_number.strip(),
                "created_at": self._clock.now(),
            },
        )
        return created["id"]

    async def _recover_lead(self, draft: BookingDraft, booking: Booking) -> None:
        if self._lead_capture is None:
            return
        recovered = await self._lead_capture.mark_lead_as_recovered(
            draft.renter.email, booking.vehicle_id, booking.id
        )
        if not recovered:
            logger.warning(
                "Lead not marked as recovered",
                extra={"booking_id": booking.id, "vehicle_id": booking.vehicle_id},
            )
