"""Servicio de captura de leads con guardado diferido (debounce)."""

import asyncio
import logging

from carrental.application.dtos.lead_dto import LeadData, SaveLeadResult
from carrental.application.interfaces.clock import Clock
from carrental.application.interfaces.persistence import PersistenceService
from carrental.application.use_cases.mark_lead_recovered import MarkLeadRecoveredUseCase
from carrental.application.use_cases.save_lead import SaveLeadUseCase

logger = logging.getLogger(__name__)

DEFAULT_SAVE_DELAY_MS = 2000


class LeadCaptureService:
    """
    Guarda el avance del formulario como lead mientras el cliente escribe.

    Cada instancia es dueña de un único temporizador: una nueva llamada a
    `debounced_save_lead` reinicia la ventana y solo la última se persiste.
    Se usa una instancia por sesión de borrador.
    """

    def __init__(
        self,
        persistence: PersistenceService,
        clock: Clock,
        delay_ms: int = DEFAULT_SAVE_DELAY_MS,
    ) -> None:
        """
        Inicializa el servicio.

        Args:
            persistence: Servicio de persistencia.
            clock: Servicio de reloj.
            delay_ms: Ventana de debounce en milisegundos.
        """
        self._save_lead = SaveLeadUseCase(persistence, clock)
        self._mark_recovered = MarkLeadRecoveredUseCase(persistence)
        self._delay_ms = delay_ms
        self._pending: asyncio.Task | None = None

    @property
    def has_pending_save(self) -> bool:
        """Verifica si hay un guardado programado."""
        return self._pending is not None and not self._pending.done()

    def debounced_save_lead(self, lead_data: LeadData, delay_ms: int | None = None) -> None:
        """
        Programa un guardado; cancela el que estuviera pendiente.

        Debe llamarse dentro de un event loop en ejecución.
        """
        self.cancel_pending_save()
        delay = self._delay_ms if delay_ms is None else delay_ms
        self._pending = asyncio.get_running_loop().create_task(
            self._save_after(lead_data, delay / 1000)
        )

    def cancel_pending_save(self) -> None:
        """Cancela el guardado programado (al desmontar la vista)."""
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> SaveLeadResult | None:
        """Espera el guardado programado, si existe, y retorna su resultado."""
        task = self._pending
        if task is None:
            return None
        try:
            return await task
        except asyncio.CancelledError:
            return None
        finally:
            if self._pending is task:
                self._pending = None

    async def save_or_update_lead(self, lead_data: LeadData) -> SaveLeadResult:
        """Upsert inmediato del lead."""
        return await self._save_lead.execute(lead_data)

    async def mark_lead_as_recovered(
        self, email: str, vehicle_id: str | None, booking_id: str
    ) -> bool:
        """Vincula el lead con la reserva que lo convirtió."""
        return await self._mark_recovered.execute(email, vehicle_id, booking_id)

    async def _save_after(self, lead_data: LeadData, delay_seconds: float) -> SaveLeadResult:
        await asyncio.sleep(delay_seconds)
        result = await self._save_lead.execute(lead_data)
        if not result.success:
            logger.warning("Debounced lead save failed", extra={"error": result.error})
        return result
