import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from carrental.api.dependencies import _sql_bundle
from carrental.api.routers.admin import router as admin_router
from carrental.api.routers.health import router as health_router
from carrental.api.routers.storefront import router as storefront_router
from carrental.config import get_settings
from carrental.domain.errors import (
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)
from carrental.infrastructure.db.engine import create_schema

settings = get_settings()

# Configure structured logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: 422,
    NotFoundError: 404,
    InvalidTransitionError: 409,
    TransientStoreError: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not get_settings().use_in_memory:
        # Initialize DB tables (for dev/demo purposes)
        await create_schema(_sql_bundle()["engine"])
    yield
    if not get_settings().use_in_memory:
        await _sql_bundle()["engine"].dispose()


app = FastAPI(
    title="Car Rental Booking API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Maps domain errors to HTTP responses carrying the specific reason."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        400,
    )
    log = logger.error if status_code >= 500 else logger.info
    log(
        "Request failed with domain error",
        extra={"path": request.url.path, "error_code": exc.code, "status_code": status_code},
    )
    content = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, ValidationError):
        content["field"] = exc.field
    return JSONResponse(status_code=status_code, content=content)


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
        },
    )


app.include_router(health_router, tags=["Health"])
app.include_router(storefront_router, prefix="/api/v1", tags=["Storefront"])
app.include_router(admin_router, prefix="/api/v1", tags=["Admin"])
