# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request made to the garden API: what was asked for, how long it
# took and whether it failed, tagged with an id so one request can be followed through the logs.
# 🧪 Purpose (Technical Summary):
# Request logging middleware with X-Request-ID correlation. The request id is bound into the
# logging ContextVars for the duration of the request so handler and repository log lines
# carry it, and timing is reported through PerformanceLogger.
# 🔗 Dependencies:
# Starlette BaseHTTPMiddleware, app.shared.utils.logging, uuid
# 🔄 Connected Modules / Calls From:
# app.main (middleware registration), app.main exception handler (request.state.request_id)

import logging
import time
import uuid
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.utils.logging import PerformanceLogger, log_context

from . import should_exclude_path

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware for API monitoring

    Features:
    - Request/response timing
    - Request id propagation (header, request.state and log context)
    - Slow request warnings
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.request_id_header = "X-Request-ID"
        self.slow_request_threshold = slow_request_threshold
        self.performance = PerformanceLogger(logging.getLogger("app.requests"))

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)

        if should_exclude_path("logging", request.url.path):
            response = await call_next(request)
            response.headers[self.request_id_header] = request_id
            return response

        start_time = time.time()

        with log_context(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception as e:
                duration_ms = (time.time() - start_time) * 1000
                logger.error(
                    f"Unhandled error on {request.method} {request.url.path} "
                    f"after {duration_ms:.2f}ms: {type(e).__name__}: {e}"
                )
                raise

            duration_ms = (time.time() - start_time) * 1000
            self.performance.log_request(
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
                extra={"request_id": request_id, "client": self._client_host(request)},
            )
            if duration_ms / 1000 > self.slow_request_threshold:
                logger.warning(f"Slow request: {request.method} {request.url.path} took {duration_ms:.0f}ms")

        response.headers[self.request_id_header] = request_id
        return response

    def _get_or_create_request_id(self, request: Request) -> str:
        if hasattr(request.state, "request_id"):
            return request.state.request_id

        request_id = request.headers.get(self.request_id_header.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id

    @staticmethod
    def _client_host(request: Request) -> Optional[str]:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else None


def get_request_id(request: Request) -> Optional[str]:
    """Request id assigned by RequestLoggingMiddleware, if any."""
    return getattr(request.state, "request_id", None)
