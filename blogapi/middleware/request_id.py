"""
Blog API — Request ID Middleware
==================================

What:  Assigns a correlation ID to each request and echoes it back in the
       `X-Request-ID` response header.
How:   Reuses a client-supplied `X-Request-ID`, otherwise generates an
       8-character UUID prefix. The ID is kept in a ContextVar so log
       calls and exception handlers can read it without the Request.

Unhandled exceptions:
    Starlette runs the app's `Exception` handler in ServerErrorMiddleware,
    outside every user middleware, where the ContextVar is already reset
    and no header can be added. This middleware therefore turns an
    exception escaping the app into the 500 body itself, so the fallback
    response still carries `request_id` and `X-Request-ID`.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on one event loop each see their own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def unexpected_error_response(rid: str, exc: Exception) -> JSONResponse:
    """The 500 internal_server_error envelope for an unhandled exception."""
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "request_id": rid,
            "details": str(exc),
        },
    )


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets `request_id_var` and `request.state.request_id` for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
            response = unexpected_error_response(rid, exc)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
