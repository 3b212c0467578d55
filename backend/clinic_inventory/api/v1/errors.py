"""Conversion of service exceptions into HTTP errors."""

import structlog
from fastapi import HTTPException, status

from clinic_inventory.services.exceptions import NotFoundError, RecordValidationError, ServiceError, ValidationError
from clinic_inventory.services.ids.exceptions import (
    CounterUnavailableError,
    DuplicateIdError,
    RetryExhaustedError,
)

logger = structlog.get_logger(__name__)


def to_http_exception(exc: ServiceError, *, entity: str) -> HTTPException:
    """Map a service error to an HTTPException whose detail names the offending field."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")
    if isinstance(exc, DuplicateIdError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": f"{entity} with this {exc.field} already exists", "field": exc.field},
        )
    if isinstance(exc, RetryExhaustedError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": f"Could not allocate a unique {exc.field}, please retry", "field": exc.field},
        )
    if isinstance(exc, RecordValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "details": exc.details},
        )
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, CounterUnavailableError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))

    logger.error("Unhandled service error", entity=entity, error=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
