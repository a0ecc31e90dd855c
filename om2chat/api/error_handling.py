"""
API error handling.

Maps the domain exception taxonomy onto HTTP responses of the form
``{"error": "<message>"}``.

Dependencies: fastapi, om2chat.core.exceptions
System role: Uniform error responses across routers
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from om2chat.core.exceptions import Om2ChatException, PipelineStageError
from om2chat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the JSON error payload."""
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_domain_error(request: Request, exc: Om2ChatException) -> JSONResponse:
    """Report a domain error with its own status code."""
    if isinstance(exc, PipelineStageError):
        message = exc.public_message
    else:
        message = exc.message

    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} - {type(exc).__name__}: {exc}",
            extra={"error_type": type(exc).__name__, "path": request.url.path},
        )
    else:
        logger.warning(
            f"{request.method} {request.url.path} - {type(exc).__name__}: {exc}",
            extra={"error_type": type(exc).__name__, "path": request.url.path},
        )
    return error_response(exc.status_code, message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters are client errors (400)."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"Invalid {location}: {message}"
    logger.warning(f"{request.method} {request.url.path} - validation error: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; details stay in the logs."""
    log_exception_with_context(
        logger,
        f"{request.method} {request.url.path} - unhandled exception",
        exc,
        path=request.url.path,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on an application."""
    app.add_exception_handler(Om2ChatException, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
