"""
Translation of domain and storage errors into JSON error responses.

Every failure leaves the API as ``{"detail": ..., "error_type": ..., "details": ...}``.
Domain errors are described once in ``DOMAIN_ERRORS``; the most specific class
in an exception's MRO decides its status. Storage errors are reduced to a
generic message so database text never reaches a client.
"""

import logging
from typing import Any, Dict, NamedTuple, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from costume_rental.core.exceptions import (
    BusinessRuleViolationError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    InactiveUserError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ErrorMapping(NamedTuple):
    status_code: int
    error_type: str
    log_level: int
    public: bool = True


DOMAIN_ERRORS: Dict[type, ErrorMapping] = {
    ValidationError: ErrorMapping(
        status.HTTP_400_BAD_REQUEST, "validation_error", logging.WARNING
    ),
    UnauthorizedError: ErrorMapping(
        status.HTTP_401_UNAUTHORIZED, "unauthorized", logging.INFO
    ),
    InactiveUserError: ErrorMapping(
        status.HTTP_403_FORBIDDEN, "inactive_user", logging.WARNING
    ),
    EntityNotFoundError: ErrorMapping(
        status.HTTP_404_NOT_FOUND, "entity_not_found", logging.INFO
    ),
    ConflictError: ErrorMapping(
        status.HTTP_409_CONFLICT, "conflict_error", logging.WARNING
    ),
    BusinessRuleViolationError: ErrorMapping(
        status.HTTP_422_UNPROCESSABLE_ENTITY, "business_rule_violation", logging.WARNING
    ),
    DomainException: ErrorMapping(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "domain_error", logging.ERROR, public=False
    ),
}

INTEGRITY_MESSAGES = (
    ("unique", "A record with this value already exists"),
    ("foreign key", "Referenced record does not exist"),
    ("not null", "Required field is missing"),
)


def create_error_response(
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    error_type: Optional[str] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"detail": message}
    if error_type:
        content["error_type"] = error_type
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def mapping_for(exc: DomainException) -> ErrorMapping:
    for cls in type(exc).__mro__:
        if cls in DOMAIN_ERRORS:
            return DOMAIN_ERRORS[cls]
    return DOMAIN_ERRORS[DomainException]


async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
    mapping = mapping_for(exc)
    logger.log(
        mapping.log_level,
        f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
    )

    if not mapping.public:
        return create_error_response(
            mapping.status_code, "An internal error occurred", error_type=mapping.error_type
        )
    return create_error_response(
        mapping.status_code, exc.message, exc.details, mapping.error_type
    )


async def integrity_error_handler(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Report constraint failures without the driver's message."""
    logger.error(f"Database integrity error: {exc}")

    text = str(exc).lower()
    message = next(
        (message for marker, message in INTEGRITY_MESSAGES if marker in text),
        "Database constraint violation",
    )
    return create_error_response(
        status.HTTP_400_BAD_REQUEST, message, error_type="integrity_error"
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Request validation error: {exc.errors()}")

    return create_error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Request validation failed",
        {"validation_errors": exc.errors()},
        "request_validation_error",
    )


EXCEPTION_HANDLERS = {
    **{exc_class: domain_error_handler for exc_class in DOMAIN_ERRORS},
    IntegrityError: integrity_error_handler,
    RequestValidationError: request_validation_error_handler,
}
