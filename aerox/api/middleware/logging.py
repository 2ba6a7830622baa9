"""
AeroX Dashboard - Request Logging Middleware
============================================

Per-request ID, timing, and logging of slow or failed requests.
"""

import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from aerox.core.logger import logger
from aerox.api.config import get_api_config


REQUEST_ID_HEADER = "X-Request-ID"

# Polled by uptime monitors, not worth a debug line each
QUIET_PATHS = ("/health", "/api/health")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every API request.

    - Assigns request.state.request_id (echoed in X-Request-ID)
    - Adds X-Response-Time in milliseconds
    - Warns on 5xx responses and on requests slower than slow_request_ms
    """

    def __init__(self, app, slow_request_ms: Optional[int] = None):
        super().__init__(app)
        self._slow_ms = slow_request_ms if slow_request_ms is not None else get_api_config().slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        request.state.request_id = request_id

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}ms"

        path = request.url.path
        details = [
            ("Method", request.method),
            ("Path", path[:80]),
            ("Status", str(response.status_code)),
            ("Time", f"{elapsed_ms:.0f}ms"),
            ("Request ID", request_id),
        ]

        if response.status_code >= 500:
            logger.warning("API Request Failed", details)
        elif elapsed_ms > self._slow_ms:
            logger.warning("Slow API Request", details)
        elif path not in QUIET_PATHS:
            logger.debug("API Request", details)

        return response


__all__ = ["LoggingMiddleware", "REQUEST_ID_HEADER"]
