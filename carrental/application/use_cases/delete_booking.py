import logging

from carrental.application.dtos.booking_dto import BookingResult
from carrental.application.interfaces.persistence import PersistenceService
from carrental.domain.constants import BOOKINGS, PAYMENTS
from carrental.domain.entities.booking import Booking
from carrental.domain.errors import DomainError, NotFoundError

logger = logging.getLogger(__name__)


class DeleteBookingUseCase:
    """Hard delete of a booking and its payments. No status transition is recorded."""

    def __init__(self, persistence: PersistenceService) -> None:
        self._persistence = persistence

    async def execute(self, booking_id: str) -> BookingResult:
        try:
            record = await self._persistence.find_one(BOOKINGS, {"id": booking_id})
            if record is None:
                raise NotFoundError("Booking", booking_id)
            booking = Booking.from_record(record)

            payments = await self._persistence.query(PAYMENTS, filters={"booking_id": booking_id})
            for payment in payments:
                await self._persistence.delete(PAYMENTS, payment["id"])
            await self._persistence.delete(BOOKINGS, booking_id)
        except DomainError as exc:
            logger.error(
                "Booking delete failed",
                extra={"booking_id": booking_id, "error_code": exc.code, "error": exc.message},
            )
            return BookingResult.failed(exc)

        logger.info(
            "Booking deleted",
            extra={"booking_id": booking_id, "booking_reference": booking.booking_reference},
        )
        return BookingResult.ok(booking)
