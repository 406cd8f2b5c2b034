import logging

from carrental.application.interfaces.persistence import PersistenceService
from carrental.application.validation import normalize_email
from carrental.domain.constants import LEADS
from carrental.domain.entities.lead import Lead, LeadStatus, LeadStep
from carrental.domain.errors import DomainError

logger = logging.getLogger(__name__)


class MarkLeadRecoveredUseCase:
    """Links a lead to the booking that converted it. Returns False instead of raising."""

    def __init__(self, persistence: PersistenceService) -> None:
        self._persistence = persistence

    async def execute(self, email: str, vehicle_id: str | None, booking_id: str) -> bool:
        email = normalize_email(email)
        if not email:
            return False

        try:
            record = await self._persistence.find_one(
                LEADS, {"email": email, "vehicle_id": vehicle_id}
            )
            if record is None:
                logger.info("No lead to recover", extra={"vehicle_id": vehicle_id})
                return False

            lead = Lead.from_record(record)
            if lead.is_recovered:
                return True

            await self._persistence.update(
                LEADS,
                lead.id,
                {
                    "status": LeadStatus.RECOVERED.value,
                    "recovered_booking_id": booking_id,
                    "last_step": LeadStep.PAYMENT.value,
                },
            )
        except DomainError as exc:
            logger.error(
                "Failed to mark lead as recovered",
                extra={"booking_id": booking_id, "error_code": exc.code, "error": exc.message},
            )
            return False

        logger.info("Lead recovered", extra={"lead_id": lead.id, "booking_id": booking_id})
        return True
