import logging
import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("internship_intake.requests")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add X-Request-ID header for request tracing.

    If the client sends X-Request-ID, it is preserved.
    Otherwise, a new UUID is generated.

    The request ID is:
    - Available in request.state.request_id for logging
    - Bound to the structlog context for the duration of the request
    - Returned in response headers for client correlation
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID")
        if not request_id:
            request_id = str(uuid.uuid4())

        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.info(
            f"REQUEST | id={request_id} | method={request.method} | path={request.url.path}"
        )

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers["X-Request-ID"] = request_id
        return response
