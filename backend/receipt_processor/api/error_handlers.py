"""
Custom exception handlers for FastAPI.

Every error leaves the service as a single status code with a short
plain text diagnostic; exception messages, validation structures and
tracebacks stay in the logs.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from receipt_processor.core.observability import sentry_capture

logger = logging.getLogger(__name__)


def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Covers route-raised errors plus routing 404 / 405 from Starlette
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected %s %s: %d validation error(s)", request.method, request.url.path, len(exc.errors()))
    return PlainTextResponse("Invalid request", status_code=HTTP_400_BAD_REQUEST)


def generic_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    sentry_capture(exc)
    return PlainTextResponse("Internal server error", status_code=HTTP_500_INTERNAL_SERVER_ERROR)
