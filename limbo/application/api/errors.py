"""Centralized error transformation for API routes.

Maps LIMBO errors (domain and infrastructure) and request validation
failures to JSON responses.
"""

import logging
from typing import Any

from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError

from limbo.domain.shared.error import (
    DomainError,
    InfrastructureError,
    LimboError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY: dict[str, Any] = {"success": False, "message": "Internal server error"}

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
}


def map_limbo_error(error: LimboError) -> HTTPException:
    """Map a LIMBO error to an HTTPException.

    Args:
        error: The LIMBO error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "success": False,
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        # Infrastructure errors → 503 Service Unavailable
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown LimboError subclasses
    return HTTPException(status_code=500, detail=INTERNAL_ERROR_BODY)


def map_request_validation_error(error: RequestValidationError) -> HTTPException:
    """Map a request body validation failure.

    A body that is not JSON at all never reached validation proper and is
    answered like any other internal failure; missing or blank fields are a
    400 listing each offending field.
    """
    errors = error.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        logger.error("Malformed request body: %s", errors)
        return HTTPException(status_code=500, detail=INTERNAL_ERROR_BODY)

    fields = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in errors
    ]
    return HTTPException(
        status_code=400,
        detail={
            "success": False,
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "errors": fields,
        },
    )
