"""Booking lifecycle manager: creation and admin-driven status changes."""

import logging

from carrental.application.dtos.booking_dto import BookingResult, PaymentInput
from carrental.application.interfaces.clock import Clock
from carrental.application.interfaces.persistence import PersistenceService
from carrental.application.interfaces.reference_generator import ReferenceGenerator
from carrental.application.lead_capture import LeadCaptureService
from carrental.application.use_cases.create_booking import CreateBookingUseCase
from carrental.application.use_cases.delete_booking import DeleteBookingUseCase
from carrental.application.use_cases.update_booking_status import UpdateBookingStatusUseCase
from carrental.domain.constants import BOOKINGS, PAYMENTS
from carrental.domain.entities.booking import Booking, BookingStatus
from carrental.domain.entities.draft import BookingDraft
from carrental.domain.entities.payment import Payment, PaymentStatus, latest_payment
from carrental.domain.pricing import PriceBreakdown
from carrental.domain.value_objects.booking_reference import BookingReference

logger = logging.getLogger(__name__)


class BookingLifecycleManager:
    """
    Entry point for every booking write.

    Status changes go through the transition table on the entity. An invalid
    request comes back as a failed result and storage is left untouched.
    """

    def __init__(
        self,
        persistence: PersistenceService,
        clock: Clock,
        reference_generator: ReferenceGenerator,
        lead_capture: LeadCaptureService | None = None,
    ) -> None:
        self._persistence = persistence
        self._create = CreateBookingUseCase(persistence, clock, reference_generator, lead_capture)
        self._update = UpdateBookingStatusUseCase(persistence, clock)
        self._delete = DeleteBookingUseCase(persistence)

    # === Creación ===

    async def create_booking(
        self,
        draft: BookingDraft,
        pricing: PriceBreakdown,
        payment: PaymentInput | None = None,
    ) -> BookingResult:
        """Creates a pending booking from a completed draft."""
        return await self._create.execute(draft, pricing, payment)

    # === Transiciones ===

    async def accept(self, booking_id: str) -> BookingResult:
        return await self._update.execute(booking_id, lambda b: b.accept(), "accept")

    async def decline(self, booking_id: str, reason: str | None = None) -> BookingResult:
        return await self._update.execute(booking_id, lambda b: b.decline(reason), "decline")

    async def complete(self, booking_id: str) -> BookingResult:
        return await self._update.execute(booking_id, lambda b: b.complete(), "complete")

    async def cancel(
        self,
        booking_id: str,
        reason: str | None = None,
        with_refund: bool = False,
    ) -> BookingResult:
        return await self._update.execute(
            booking_id, lambda b: b.cancel(reason, with_refund), "cancel"
        )

    async def initiate_refund(
        self, booking_id: str, refund_reference_id: str | None = None
    ) -> BookingResult:
        return await self._update.execute(
            booking_id, lambda b: b.initiate_refund(refund_reference_id), "initiate_refund"
        )

    async def attach_refund_proof(
        self,
        booking_id: str,
        refund_reference_id: str,
        proof_url: str | None = None,
    ) -> BookingResult:
        return await self._update.execute(
            booking_id,
            lambda b: b.attach_refund_proof(refund_reference_id, proof_url),
            "attach_refund_proof",
        )

    async def confirm_refund(self, booking_id: str) -> BookingResult:
        """Closes the refund and marks the most recent payment as refunded."""
        return await self._update.execute(booking_id, lambda b: b.confirm_refund(), "confirm_refund")

    async def transition(self, booking_id: str, target: BookingStatus | str) -> BookingResult:
        """Generic status change validated against the transition table."""
        return await self._update.execute(
            booking_id, lambda b: b.transition_to(target), f"transition:{target}"
        )

    # === Borrado ===

    async def delete_booking(self, booking_id: str) -> BookingResult:
        """Hard delete; not a cancellation."""
        return await self._delete.execute(booking_id)

    # === Lecturas ===
    # Las lecturas no devuelven BookingResult: un fallo del store se propaga
    # como TransientStoreError (la API lo responde con 503).

    async def get_booking(self, booking_id: str) -> Booking | None:
        """
        Raises:
            TransientStoreError: si el store no responde.
        """
        record = await self._persistence.find_one(BOOKINGS, {"id": booking_id})
        return Booking.from_record(record) if record else None

    async def get_by_reference(self, booking_reference: str) -> Booking | None:
        """
        Busca por la referencia que ve el cliente; None si no tiene el formato.

        Raises:
            TransientStoreError: si el store no responde.
        """
        reference = BookingReference.parse(booking_reference)
        if reference is None:
            return None
        record = await self._persistence.find_one(BOOKINGS, {"booking_reference": reference.value})
        return Booking.from_record(record) if record else None

    async def latest_payment_status(self, booking_id: str) -> PaymentStatus | None:
        """
        Effective payment state: the status of the most recent payment.

        Raises:
            TransientStoreError: si el store no responde.
        """
        records = await self._persistence.query(
            PAYMENTS, filters={"booking_id": booking_id}, order_by="created_at"
        )
        latest = latest_payment(Payment.from_record(r) for r in records)
        return latest.payment_status if latest else None
