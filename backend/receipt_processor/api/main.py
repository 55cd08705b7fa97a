"""Entry point for the FastAPI application.

This module constructs the FastAPI app, registers the exception
handlers and includes the receipts router. Only the two receipt
endpoints are exposed; the OpenAPI schema and docs UI are mounted when
``ENABLE_DOCS`` is set.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from receipt_processor import __version__
from receipt_processor.api.error_handlers import (
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from receipt_processor.api.routes.receipts import router as receipts_router
from receipt_processor.core.config import settings
from receipt_processor.core.observability import init_sentry

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    logger.info("Starting %s %s (%s)", settings.PROJECT_NAME, __version__, settings.ENVIRONMENT)
    if init_sentry("api"):
        logger.info("Sentry SDK initialized (api)")
    yield
    logger.info("Shutting down...")


def create_app() -> FastAPI:
    docs = settings.ENABLE_DOCS
    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=__version__,
        lifespan=lifespan,
        openapi_url="/openapi.json" if docs else None,
        docs_url="/docs" if docs else None,
        redoc_url=None,
        redirect_slashes=False,
    )

    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(Exception, generic_exception_handler)

    application.include_router(receipts_router)
    return application


app = create_app()
