"""Puerto de reloj: toda marca de tiempo del core sale de aquí."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Hora actual, timezone-aware en UTC."""
        raise NotImplementedError

    def minutes_ago(self, minutes: int) -> datetime:
        """Límite usado por los barridos de expiración."""
        return self.now() - timedelta(minutes=minutes)


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock(Clock):
    """
    Reloj detenido para tests.

    `advance` acepta los mismos argumentos que `timedelta`
    (ej: `clock.advance(minutes=61)`).
    """

    def __init__(self, start: datetime | None = None):
        self._current = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._current

    def set_time(self, moment: datetime) -> None:
        self._current = moment

    def advance(self, **delta: float) -> datetime:
        self._current += timedelta(**delta)
        return self._current
