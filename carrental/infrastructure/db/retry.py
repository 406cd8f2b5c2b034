"""
Reintento de operaciones SQL ante contención de locks.

Solo se reintentan errores de driver que indican un conflicto pasajero
(deadlock, lock wait timeout, archivo SQLite bloqueado). Cualquier otro
error se propaga en el primer intento.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fragmentos del mensaje del driver que identifican un conflicto pasajero
TRANSIENT_MARKERS = (
    "1213",  # MySQL: deadlock
    "1205",  # MySQL: lock wait timeout
    "40P01",  # PostgreSQL: deadlock_detected
    "deadlock detected",
    "database is locked",  # SQLite
)


def is_transient_error(error: BaseException) -> bool:
    if not isinstance(error, DBAPIError):
        return False
    text = str(error)
    return any(marker in text for marker in TRANSIENT_MARKERS)


def backoff_delay(attempt: int, base_delay: float) -> float:
    """Espera antes del reintento `attempt` (1-based): base, 2x base, 4x base..."""
    return base_delay * 2 ** (attempt - 1)


async def retry_on_transient_error(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 0.1,
) -> T:
    """
    Ejecuta `func` hasta `max_attempts` veces mientras falle por contención.

    Raises:
        ValueError: si max_attempts < 1.
        El último error del driver si se agotan los intentos, o cualquier
        error no transitorio de inmediato.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    attempt = 1
    while True:
        try:
            return await func()
        except DBAPIError as exc:
            if not is_transient_error(exc):
                raise
            if attempt >= max_attempts:
                logger.error(
                    "Lock contention persists, giving up",
                    extra={"attempts": attempt, "error": str(exc)},
                )
                raise
            delay = backoff_delay(attempt, base_delay)
            logger.warning(
                "Lock contention, retrying",
                extra={
                    "attempt": attempt,
                    "max_attempts": max_attempts,
                    "retry_delay": delay,
                    "error": str(exc),
                },
            )
            await asyncio.sleep(delay)
            attempt += 1
