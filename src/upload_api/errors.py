"""
Error taxonomy for the Upload API and the handlers that render it.

Every error raised by the upload path is an ``UploadError`` subclass carrying
the HTTP status it maps to. Messages are sent to the client verbatim as a
plain-text body.
"""

import logging

from fastapi import Request, status
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)


class UploadError(Exception):
    """Base class for errors surfaced directly to the HTTP client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(UploadError):
    """The client sent an invalid, oversized or unsupported file."""

    status_code = status.HTTP_400_BAD_REQUEST


class MethodNotAllowed(UploadError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED

    def __init__(self, method: str):
        super().__init__(f"Method {method} is not allowed")
        self.method = method


class InternalError(UploadError):
    """Parsing, entropy, MIME lookup or filesystem failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class RandomSourceError(Exception):
    """The OS entropy source could not be read."""


class ExtensionLookupError(Exception):
    """No filename extension is known for a MIME type."""


async def handle_upload_errors(request: Request, exc: UploadError) -> PlainTextResponse:
    """Render an ``UploadError`` as a plain-text response."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return PlainTextResponse(f"{exc.message}\n", status_code=exc.status_code)


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception:  # pylint: disable=broad-except
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return PlainTextResponse(
            "Internal server error\n",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
