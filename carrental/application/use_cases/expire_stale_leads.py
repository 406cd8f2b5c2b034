import logging

from carrental.application.interfaces.clock import Clock
from carrental.application.interfaces.persistence import PersistenceService
from carrental.domain.constants import LEADS
from carrental.domain.entities.lead import Lead, LeadStatus

logger = logging.getLogger(__name__)


class ExpireStaleLeadsUseCase:
    def __init__(
        self,
        persistence: PersistenceService,
        clock: Clock,
        expiry_minutes: int = 60,
    ) -> None:
        self._persistence = persistence
        self._clock = clock
        self._expiry_minutes = expiry_minutes

    async def execute(self) -> int:
        """
        Moves pending leads idle past the expiry window to expired. Returns the count.

        Raises:
            TransientStoreError: si el store falla; los leads ya expirados
                quedan así y el siguiente barrido continúa con el resto.
        """
        cutoff = self._clock.minutes_ago(self._expiry_minutes)
        records = await self._persistence.query(LEADS, filters={"status": LeadStatus.PENDING.value})

        expired = 0
        for record in records:
            lead = Lead.from_record(record)
            if not lead.is_stale(cutoff):
                continue
            await self._persistence.update(LEADS, lead.id, {"status": LeadStatus.EXPIRED.value})
            expired += 1

        if expired:
            logger.info("Expired stale leads", extra={"count": expired, "cutoff": cutoff.isoformat()})
        return expired
