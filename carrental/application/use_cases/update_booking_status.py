import logging
from collections.abc import Callable

from carrental.application.dtos.booking_dto import BookingResult
from carrental.application.interfaces.clock import Clock
from carrental.application.interfaces.persistence import PersistenceService
from carrental.domain.constants import BOOKINGS, PAYMENTS
from carrental.domain.entities.booking import Booking, BookingStatus
from carrental.domain.entities.payment import Payment, PaymentStatus, latest_payment
from carrental.domain.errors import DomainError, NotFoundError

logger = logging.getLogger(__name__)

BookingChange = Callable[[Booking], None]

_STATUS_FIELDS = (
    "booking_status",
    "refund_status",
    "refund_reference_id",
    "refund_proof_url",
    "cancellation_reason",
    "updated_at",
)


class UpdateBookingStatusUseCase:
    """
    Loads a booking, applies a lifecycle change and persists the result once.

    The change is validated by the entity before anything is written.
    """

    def __init__(self, persistence: PersistenceService, clock: Clock) -> None:
        self._persistence = persistence
        self._clock = clock

    async def execute(self, booking_id: str, change: BookingChange, action: str) -> BookingResult:
        booking: Booking | None = None
        try:
            record = await self._persistence.find_one(BOOKINGS, {"id": booking_id})
            if record is None:
                raise NotFoundError("Booking", booking_id)
            booking = Booking.from_record(record)
            previous = booking.booking_status

            change(booking)
            booking.updated_at = self._clock.now()

            # El pago va primero: si falla, la reserva sigue en refund_pending
            # y la confirmación se puede reintentar.
            if booking.booking_status == BookingStatus.REFUNDED and previous != BookingStatus.REFUNDED:
                await self._mark_latest_payment_refunded(booking_id)

            record = booking.to_record()
            await self._persistence.update(
                BOOKINGS, booking_id, {name: record[name] for name in _STATUS_FIELDS}
            )
        except DomainError as exc:
            logger.warning(
                "Booking status change rejected",
                extra={"booking_id": booking_id, "action": action, "error_code": exc.code},
            )
            return BookingResult.failed(exc, booking)

        logger.info(
            "Booking status changed",
            extra={
                "booking_id": booking_id,
                "action": action,
                "from_status": previous.value,
                "to_status": booking.booking_status.value,
            },
        )
        return BookingResult.ok(booking)

    async def _mark_latest_payment_refunded(self, booking_id: str) -> None:
        records = await self._persistence.query(PAYMENTS, filters={"booking_id": booking_id})
        latest = latest_payment(Payment.from_record(r) for r in records)
        if latest is None:
            return
        await self._persistence.update(
            PAYMENTS, latest.id, {"payment_status": PaymentStatus.REFUNDED.value}
        )
