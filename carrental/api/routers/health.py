"""
Health check endpoints for monitoring and orchestration.

- /health: Basic liveness check (always returns 200)
- /health/ready: Readiness check (persistence reachable)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from carrental.api.dependencies import get_persistence
from carrental.application.interfaces.persistence import PersistenceService
from carrental.domain.constants import VEHICLES
from carrental.domain.errors import TransientStoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic liveness probe."""
    return {"status": "ok", "service": "carrental-api"}


@router.get("/health/ready")
async def health_check_ready(persistence: PersistenceService = Depends(get_persistence)):
    """
    Readiness probe.

    Returns 503 if the persistence service cannot answer a query.
    """
    try:
        await persistence.query(VEHICLES, limit=1)
    except TransientStoreError as e:
        logger.error("Readiness check: persistence unhealthy", extra={"error": e.message})
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": {"persistence": "unhealthy"}},
        )
    return {"status": "ready", "checks": {"persistence": "healthy"}}
