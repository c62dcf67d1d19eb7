"""Request performance monitoring middleware.

Times every request, tags it with a request ID and logs slow requests.

Response headers:
- X-Request-ID: the caller's request ID, or a generated UUID
- X-Response-Time: elapsed milliseconds, e.g. "12ms"

Usage::

    from backend.monitoring import PerformanceMonitoringMiddleware

    app.add_middleware(PerformanceMonitoringMiddleware, slow_request_threshold_ms=1000)
"""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"


def _client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


class PerformanceMonitoringMiddleware(BaseHTTPMiddleware):
    """Middleware that times requests and flags slow ones."""

    def __init__(self, app: ASGIApp, slow_request_threshold_ms: int = 1000) -> None:
        super().__init__(app)
        self.slow_request_threshold_ms = slow_request_threshold_ms

    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        request_path = f"{request.method} {request.url.path}"
        logger.debug(f"Starting request: {request_path}")

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.exception(f"Request failed: {request_path} in {elapsed_ms}ms")
            raise

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        response.headers[RESPONSE_TIME_HEADER] = f"{elapsed_ms}ms"
        response.headers[REQUEST_ID_HEADER] = request_id

        if elapsed_ms > self.slow_request_threshold_ms:
            logger.warning(
                f"Slow request detected: {request_path} took {elapsed_ms}ms. "
                f"Status: {response.status_code}, Client: {_client_ip(request)}, "
                f"Request ID: {request_id}"
            )
        else:
            logger.info(
                f"{request_path} -> {response.status_code} in {elapsed_ms}ms "
                f"[{request_id}]"
            )
        return response
