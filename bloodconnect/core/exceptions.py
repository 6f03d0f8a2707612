"""
Domain errors raised by the portal store and the handlers that turn them
(and framework errors) into JSON responses.
"""
import logging
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class PortalError(Exception):
    """Base class for errors reported synchronously to the caller."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    """Malformed or missing input."""
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateError(PortalError):
    """Unique constraint violated, e.g. a donor email already registered."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidStateError(PortalError):
    """Requested lifecycle transition is not in the allowed table."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, current: str = None, target: str = None):
        super().__init__(message)
        self.current = current
        self.target = target


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "N/A")


async def portal_exception_handler(request: Request, exc: PortalError):
    logger.warning(
        f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
        extra={"request_id": _request_id(request)}
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_type": type(exc).__name__},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first failing field verbatim, plus the full error list."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    message = first.get("msg", "Invalid request")
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    if location:
        message = f"{'.'.join(location)}: {message}"

    logger.info(
        f"Validation failed on {request.method} {request.url.path}: {message}",
        extra={"request_id": _request_id(request)}
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": message,
            "error_type": "ValidationError",
            "errors": jsonable_encoder(errors, custom_encoder={Exception: str}),
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={"request_id": _request_id(request)}
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
