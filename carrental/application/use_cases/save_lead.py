import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from carrental.application.dtos.lead_dto import LeadData, SaveLeadResult
from carrental.application.interfaces.clock import Clock
from carrental.application.interfaces.persistence import PersistenceService
from carrental.application.validation import normalize_email
from carrental.domain.constants import LEADS
from carrental.domain.entities.lead import AutomationStatus, Lead, LeadStatus, LeadStep
from carrental.domain.errors import DomainError, TransientStoreError, ValidationError
from carrental.domain.value_objects.rental_period import parse_date

logger = logging.getLogger(__name__)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _as_date(value: date | datetime | str | None) -> date | None:
    parsed = parse_date(value)
    if isinstance(parsed, datetime):
        return parsed.date()
    return parsed


class SaveLeadUseCase:
    """
    Upsert of an abandoned-booking lead keyed by (email, vehicle_id).

    Never raises: every failure is logged and reported in the result.
    """

    def __init__(self, persistence: PersistenceService, clock: Clock) -> None:
        self._persistence = persistence
        self._clock = clock

    async def execute(self, data: LeadData) -> SaveLeadResult:
        email = normalize_email(data.email)
        if not email:
            error = ValidationError("email", "An email address is required to save a lead")
            logger.warning("Lead not saved", extra={"reason": error.code})
            return SaveLeadResult(success=False, error=error.message)

        try:
            existing = await self._find_existing(email, data.vehicle_id)

            if existing is not None and existing.is_recovered:
                logger.debug(
                    "Lead already recovered, skipping update",
                    extra={"lead_id": existing.id},
                )
                return SaveLeadResult(success=True, lead_id=existing.id)

            record = self._build_record(data, email, existing)

            if existing is not None:
                await self._persistence.update(LEADS, existing.id, record)
                logger.info("Lead updated", extra={"lead_id": existing.id, "last_step": record["last_step"]})
                return SaveLeadResult(success=True, lead_id=existing.id)

            record["automation_status"] = AutomationStatus.NOT_SENT.value
            record["created_at"] = self._clock.now()
            saved = await self._persistence.insert(LEADS, record)
            logger.info("Lead created", extra={"lead_id": saved["id"], "last_step": record["last_step"]})
            return SaveLeadResult(success=True, lead_id=saved["id"])
        except DomainError as exc:
            logger.error(
                "Lead save failed",
                extra={"vehicle_id": data.vehicle_id, "error_code": exc.code, "error": exc.message},
            )
            return SaveLeadResult(success=False, error=exc.message)

    async def _find_existing(self, email: str, vehicle_id: str | None) -> Lead | None:
        try:
            record = await self._persistence.find_one(
                LEADS, {"email": email, "vehicle_id": vehicle_id}
            )
        except TransientStoreError as exc:
            # Sin lectura no hay forma de deduplicar; se intenta insertar.
            logger.warning("Lead lookup failed, inserting", extra={"error": exc.message})
            return None
        return Lead.from_record(record) if record else None

    def _build_record(self, data: LeadData, email: str, existing: Lead | None) -> dict[str, Any]:
        last_step = LeadStep.furthest(
            data.last_step, existing.last_step if existing else None
        ) or LeadStep.RENTER_INFO
        estimated_price = data.estimated_price
        if estimated_price is not None:
            estimated_price = Decimal(str(estimated_price))

        return {
            "lead_name": _blank_to_none(data.lead_name),
            "email": email,
            "phone": _blank_to_none(data.phone),
            "vehicle_id": _blank_to_none(data.vehicle_id),
            "pickup_location": _blank_to_none(data.pickup_location),
            "dropoff_location": _blank_to_none(data.dropoff_location),
            "pickup_date": _as_date(data.pickup_date),
            "pickup_time": _blank_to_none(data.pickup_time),
            "return_date": _as_date(data.return_date),
            "rental_days": data.rental_days or None,
            "estimated_price": estimated_price,
            "drive_option": _blank_to_none(data.drive_option),
            "last_step": last_step.value,
            "drop_off_timestamp": self._clock.now(),
            "status": LeadStatus.PENDING.value,
        }
