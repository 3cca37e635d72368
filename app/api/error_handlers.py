"""
Exception handlers for FastAPI.
"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.exceptions import (
    CampaignEngineError,
    ConfigurationError,
    NotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)


async def campaign_exception_handler(request: Request, exc: CampaignEngineError) -> JSONResponse:
    """Handler for every custom exception."""
    status_code = 500
    error_type = exc.__class__.__name__

    # Map exception type to HTTP status code
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, ValidationError):
        status_code = 400
    elif isinstance(exc, StoreError):
        status_code = 503
    elif isinstance(exc, ConfigurationError):
        status_code = 500

    logger.error(
        f"{error_type}: {exc.message}",
        extra={"error_type": error_type, "details": exc.details, "path": request.url.path},
    )

    return JSONResponse(
        status_code=status_code,
        content={"error": error_type, "message": exc.message, "details": exc.details},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.exception(f"Unhandled error: {exc}", extra={"path": request.url.path})

    return JSONResponse(
        status_code=500,
        content={
            "error": "InternalServerError",
            "message": "Internal server error",
            "details": {},
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register every exception handler on a FastAPI app.

    Usage:
        from app.api.error_handlers import register_exception_handlers

        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(CampaignEngineError, campaign_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
