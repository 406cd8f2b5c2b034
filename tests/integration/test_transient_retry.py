"""
Integration tests for transient database error retry.

Verifica que el retry automático funciona correctamente:
- Detecta deadlocks (MySQL 1213, PostgreSQL 40P01), lock wait timeout (1205)
  y base de datos bloqueada (SQLite)
- Reintenta con exponential backoff
- Logging apropiado en cada retry
- Se rinde después de max_attempts
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from carrental.infrastructure.db.retry import (
    is_transient_error,
    retry_on_transient_error,
)

pytestmark = pytest.mark.integration


def operational_error(message: str) -> OperationalError:
    return OperationalError("statement", "params", message, connection_invalidated=False)


class TestTransientErrorDetection:
    """Tests para verificar detección de errores transitorios"""

    @pytest.mark.parametrize(
        "message",
        [
            "(pymysql.err.OperationalError) (1213, 'Deadlock found when trying to get lock')",
            "(pymysql.err.OperationalError) (1205, 'Lock wait timeout exceeded')",
            "(asyncpg.exceptions.DeadlockDetectedError) 40P01 deadlock detected",
            "(sqlite3.OperationalError) database is locked",
        ],
    )
    def test_detects_transient_errors(self, message):
        assert is_transient_error(operational_error(message))

    def test_ignores_other_errors(self):
        assert not is_transient_error(Exception("database is locked"))
        assert not is_transient_error(
            operational_error("(pymysql.err.OperationalError) (2013, 'Lost connection to MySQL server')")
        )
        assert not is_transient_error(
            IntegrityError("statement", "params", "UNIQUE constraint failed: customers.id")
        )


class TestRetryLogic:
    """Tests para verificar lógica de retry"""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self):
        func = AsyncMock(return_value="ok")

        result = await retry_on_transient_error(func, max_attempts=3)

        assert result == "ok"
        assert func.await_count == 1, "No debería haber retries si tiene éxito"

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        func = AsyncMock(
            side_effect=[
                operational_error("(1213, 'Deadlock found')"),
                operational_error("database is locked"),
                "ok",
            ]
        )

        with patch("carrental.infrastructure.db.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            result = await retry_on_transient_error(func, max_attempts=3, base_delay=0.1)

        assert result == "ok"
        assert func.await_count == 3
        # backoff exponencial: 0.1s, 0.2s
        assert [c.args[0] for c in sleep.await_args_list] == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        func = AsyncMock(side_effect=operational_error("(1213, 'Deadlock found')"))

        with patch("carrental.infrastructure.db.retry.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(OperationalError):
                await retry_on_transient_error(func, max_attempts=3)

        assert func.await_count == 3, "Debería haber intentado max_attempts veces"

    @pytest.mark.asyncio
    async def test_non_transient_error_not_retried(self):
        func = AsyncMock(side_effect=ValueError("not transient"))

        with pytest.raises(ValueError, match="not transient"):
            await retry_on_transient_error(func, max_attempts=3)

        assert func.await_count == 1

    @pytest.mark.asyncio
    async def test_logs_each_retry(self):
        func = AsyncMock(side_effect=[operational_error("database is locked"), "ok"])

        with patch("carrental.infrastructure.db.retry.logger") as mock_logger:
            await retry_on_transient_error(func, max_attempts=3, base_delay=0)

        assert mock_logger.warning.called, "No se hizo logging del retry"
        assert mock_logger.warning.call_args.kwargs["extra"]["attempt"] == 1
