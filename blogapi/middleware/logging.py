"""
Blog API — Access Logging Middleware
======================================

What:  One log line per request: method, path, status, duration, request ID.
How:   Level follows the status class: 5xx → ERROR, 4xx → WARNING,
       otherwise INFO. `/health` is skipped.

Never logged: request bodies (they carry passwords) and the
Authorization header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from blogapi.middleware.request_id import request_id_var

logger = logging.getLogger("blogapi.access")

_QUIET_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Writes the access line after the response (or the failure) is known.

    An exception escaping the route is logged as a 500 and re-raised;
    RequestIDMiddleware, which wraps this one, renders the error body.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log_access(request, 500, started)
            raise

        self._log_access(request, response.status_code, started)
        return response

    @staticmethod
    def _log_access(request: Request, status: int, started: float) -> None:
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        rid = getattr(request.state, "request_id", None) or request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            _level_for(status),
            "%s %s -> %d in %.1fms (rid=%s, client=%s)",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": duration_ms,
            },
        )
