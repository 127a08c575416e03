"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to appropriate HTTP status codes and formats. A bad
document is never an error here: it yields a normal (failing) report.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from credential_validator.exceptions import ConfigurationFault

logger = structlog.get_logger(__name__)


def _error_body(error: str, message: str, details: dict | None = None) -> dict:
    return {
        "error": error,
        "message": message,
        "details": details or {},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def configuration_fault_handler(request: Request, exc: ConfigurationFault) -> JSONResponse:
    """
    Handle a malformed stage registry.

    Maps to 500 Internal Server Error: the service cannot validate anything
    until its configuration is fixed.
    """
    logger.error(
        "Stage configuration invalid",
        error=exc.message,
        details=exc.details,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("service_misconfigured", exc.message, exc.details),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle invalid request bodies.

    Maps to 400 Bad Request (client error).
    """
    errors = jsonable_encoder(exc.errors())
    logger.warning("Invalid request format", errors=errors)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("invalid_request", "Request validation failed", {"errors": errors}),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception(
        "Unexpected error",
        error_type=type(exc).__name__,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "An unexpected error occurred"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    ConfigurationFault: configuration_fault_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
