# =============================================================================
# API Exception Handlers
# =============================================================================
"""
Maps exceptions to the JSON error envelope.

Every failure is returned as::

    {"error": {"code": "...", "message": "...", "timestamp": "...", "path": "..."}}

Domain errors carry their own code and message. Anything unexpected is
logged with its traceback and reported as a generic internal error.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resume_api.database.models import utcnow
from resume_api.models.common import ErrorDetail, ErrorResponse
from resume_api.services.errors import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    RenderError,
    ResumeBuilderError,
    UnauthorizedError,
    UnsupportedOperationError,
)


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Status Mapping
# -----------------------------------------------------------------------------
# Checked in order, so subclasses inherit their parent's status
ERROR_STATUS_CODES: list[tuple[type[ResumeBuilderError], int]] = [
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (UnsupportedOperationError, status.HTTP_501_NOT_IMPLEMENTED),
    (RenderError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]

HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    415: "UNSUPPORTED_MEDIA_TYPE",
}


def status_for(exc: ResumeBuilderError) -> int:
    """
    HTTP status for a domain error.

    Args:
        exc: The domain error.

    Returns:
        Mapped status code, 500 for unmapped error classes.
    """
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[str] = None,
) -> JSONResponse:
    """Build the JSON error envelope."""
    body = ErrorResponse(
        error=ErrorDetail(
            code=code,
            message=message,
            timestamp=utcnow(),
            path=request.url.path,
            details=details,
        )
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


# -----------------------------------------------------------------------------
# Handlers
# -----------------------------------------------------------------------------
async def domain_error_handler(request: Request, exc: ResumeBuilderError) -> JSONResponse:
    """Return a domain error with its mapped status."""
    status_code = status_for(exc)
    details = exc.details if isinstance(exc, RenderError) else None

    if status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message} {details or ''}")
    else:
        logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")

    return error_response(request, status_code, exc.code, exc.message, details)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report request validation failures as 400 with the first problem."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"

    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        message,
    )


async def http_error_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Wrap framework HTTP errors, such as unknown routes, in the envelope."""
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return error_response(request, exc.status_code, code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for unhandled exceptions.

    The traceback is logged; the caller only sees a generic message.
    """
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)

    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "Internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install all exception handlers on an application.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(ResumeBuilderError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
