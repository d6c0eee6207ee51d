"""
=============================================================================
INTERNSHIP INTAKE - ERROR HANDLING MODULE
=============================================================================
Failure classes for the submission pipeline plus global exception handlers.

Features:
- One exception type per failure class (upload, persistence, notification)
- Undecodable bodies become a plain-text 400
- Upload-layer failures become a plain-text 500 with the error message
- Unhandled exceptions are logged server-side with their full stack trace
- Sanitized error message to the client outside debug mode

Usage:
    # In main.py
    from app.core.errors import register_exception_handlers
    register_exception_handlers(app)
=============================================================================
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.core.config import settings

logger = logging.getLogger(__name__)


class SubmissionError(Exception):
    """Base error for the submission pipeline."""

    pass


class UploadError(SubmissionError):
    """Error raised by the upload layer before the handler body runs."""

    pass


class UploadRejectedError(UploadError):
    """File refused by the upload constraints (type, size, field name)."""

    pass


class UploadTransportError(UploadError):
    """Media-hosting service unreachable or refused the payload."""

    pass


class PersistenceError(SubmissionError):
    """Appending the submission record to the log failed."""

    pass


class InvalidBodyError(SubmissionError):
    """Request body could not be decoded."""

    pass


class NotificationError(SubmissionError):
    """Email delivery service refused or failed the send."""

    pass


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(InvalidBodyError)
    async def invalid_body_exception_handler(request: Request, exc: InvalidBodyError):
        logger.info("Rejected body on %s %s: %s", request.method, request.url.path, exc)
        return PlainTextResponse(str(exc), status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(UploadError)
    async def upload_exception_handler(request: Request, exc: UploadError):
        logger.warning(
            "Upload failed on %s %s: %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc,
        )
        return PlainTextResponse(
            str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all handler for unhandled exceptions.

        - Logs the full traceback for debugging
        - Returns a generic error message to prevent info leakage
        - In debug mode, includes more details
        """
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}:\n"
            f"{traceback.format_exc()}"
        )

        if settings.DEBUG:
            return JSONResponse(
                status_code=500,
                content={
                    "detail": "Internal Server Error",
                    "error_type": type(exc).__name__,
                    "message": str(exc),
                    "path": request.url.path,
                },
            )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal Server Error",
                "message": "An unexpected error occurred. Please try again later.",
            },
        )
