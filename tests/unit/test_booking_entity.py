from decimal import Decimal

import pytest

from carrental.domain.entities.booking import (
    ALLOWED_TRANSITIONS,
    Booking,
    BookingStatus,
    RefundStatus,
)
from carrental.domain.entities.payment import Payment, PaymentStatus, latest_payment
from carrental.domain.errors import InvalidTransitionError


def make_booking(status: BookingStatus = BookingStatus.PENDING) -> Booking:
    return Booking(
        id="b-1",
        booking_reference="AR-TEST0001",
        total_amount=Decimal("9050"),
        booking_status=status,
    )


ALL_PAIRS = [(source, target) for source in BookingStatus for target in BookingStatus]


class TestTransitionTable:
    @pytest.mark.parametrize("source, target", ALL_PAIRS)
    def test_only_listed_transitions_are_allowed(self, source, target):
        booking = make_booking(source)
        allowed = target in ALLOWED_TRANSITIONS[source]

        if allowed:
            booking.transition_to(target)
            assert booking.booking_status == target
        else:
            with pytest.raises(InvalidTransitionError):
                booking.transition_to(target)
            assert booking.booking_status == source

    def test_cancelled_cannot_go_back_to_confirmed(self):
        booking = make_booking(BookingStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError) as exc_info:
            booking.accept()
        assert exc_info.value.current_status == "cancelled"
        assert exc_info.value.requested_status == "confirmed"

    def test_unknown_status_rejected(self):
        booking = make_booking()
        with pytest.raises(InvalidTransitionError):
            booking.transition_to("archived")
        assert booking.booking_status == BookingStatus.PENDING

    def test_terminal_statuses(self):
        assert make_booking(BookingStatus.COMPLETED).is_terminal
        assert make_booking(BookingStatus.REFUNDED).is_terminal
        assert not make_booking(BookingStatus.CANCELLED).is_terminal


class TestLifecycleMethods:
    def test_decline_records_reason(self):
        booking = make_booking()
        booking.decline("Vehicle under maintenance")

        assert booking.booking_status == BookingStatus.CANCELLED
        assert booking.cancellation_reason == "Vehicle under maintenance"
        assert booking.refund_status == RefundStatus.NONE

    def test_decline_only_from_pending(self):
        booking = make_booking(BookingStatus.CONFIRMED)
        with pytest.raises(InvalidTransitionError):
            booking.decline()
        assert booking.booking_status == BookingStatus.CONFIRMED

    def test_cancel_with_refund_ends_in_refund_pending(self):
        booking = make_booking(BookingStatus.CONFIRMED)
        booking.cancel("Customer request", with_refund=True)

        assert booking.booking_status == BookingStatus.REFUND_PENDING
        assert booking.refund_status == RefundStatus.PENDING
        assert booking.cancellation_reason == "Customer request"

    def test_cancel_with_refund_from_completed_leaves_state(self):
        booking = make_booking(BookingStatus.COMPLETED)
        with pytest.raises(InvalidTransitionError):
            booking.cancel(with_refund=True)
        assert booking.booking_status == BookingStatus.COMPLETED
        assert booking.refund_status == RefundStatus.NONE

    @pytest.mark.parametrize(
        "status", [BookingStatus.CANCELLED, BookingStatus.COMPLETED, BookingStatus.REFUND_PENDING]
    )
    def test_cancel_with_refund_reports_refused_cancellation(self, status):
        booking = make_booking(status)
        with pytest.raises(InvalidTransitionError) as exc_info:
            booking.cancel(with_refund=True)

        assert exc_info.value.current_status == status.value
        assert exc_info.value.requested_status == BookingStatus.CANCELLED.value
        assert booking.booking_status == status

    def test_cancelled_booking_refunded_through_initiate_refund(self):
        booking = make_booking(BookingStatus.CANCELLED)
        booking.initiate_refund("GCASH-77")

        assert booking.booking_status == BookingStatus.REFUND_PENDING
        assert booking.refund_reference_id == "GCASH-77"

    def test_refund_flow(self):
        booking = make_booking(BookingStatus.CONFIRMED)
        booking.initiate_refund()
        booking.attach_refund_proof("GCASH-123", "https://files.example.com/proof.png")
        booking.confirm_refund()

        assert booking.booking_status == BookingStatus.REFUNDED
        assert booking.refund_status == RefundStatus.COMPLETED
        assert booking.refund_reference_id == "GCASH-123"
        assert booking.refund_proof_url == "https://files.example.com/proof.png"

    def test_refund_proof_requires_refund_pending(self):
        booking = make_booking(BookingStatus.CONFIRMED)
        with pytest.raises(InvalidTransitionError):
            booking.attach_refund_proof("GCASH-123")
        assert booking.refund_reference_id is None


class TestRecordMapping:
    def test_round_trip_keeps_status_and_amount(self):
        booking = make_booking(BookingStatus.REFUND_PENDING)
        booking.refund_status = RefundStatus.PENDING
        record = booking.to_record()

        assert record["booking_status"] == "refund_pending"
        restored = Booking.from_record({**record, "total_amount": 9050.0, "unknown": "x"})
        assert restored.booking_status == BookingStatus.REFUND_PENDING
        assert restored.total_amount == Decimal("9050.0")

    def test_new_booking_record_has_no_id(self):
        booking = Booking(booking_reference="AR-X")
        assert "id" not in booking.to_record()


class TestLatestPayment:
    def test_most_recent_wins(self):
        from datetime import datetime, timezone

        older = Payment(id="p1", payment_status=PaymentStatus.PAID, created_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
        newer = Payment(id="p2", payment_status=PaymentStatus.FAILED, created_at=datetime(2026, 1, 2, tzinfo=timezone.utc))

        assert latest_payment([newer, older]).id == "p2"

    def test_no_payments(self):
        assert latest_payment([]) is None
