"""
Request logging middleware for FastAPI using Loguru.

Every request gets an id, echoed back as ``X-Request-ID`` and bound as
``request_id`` on every record logged while the request is handled, and one
log line at the REQUEST level once the response is ready.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from shortener.core.logging import REQUEST_LEVEL


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency for each request."""

    def __init__(self, app: ASGIApp, enabled: bool = True):
        super().__init__(app)
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next) -> Response:
        # Reuse an id assigned by a proxy, otherwise mint one
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start_time = time.perf_counter()
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)

        response.headers["X-Request-ID"] = request_id

        if self.enabled:
            client_ip = request.client.host if request.client else "unknown"
            if "X-Forwarded-For" in request.headers:
                forwarded_ips = request.headers["X-Forwarded-For"].split(",")
                if forwarded_ips:
                    client_ip = forwarded_ips[0].strip()

            logger.log(
                REQUEST_LEVEL,
                "{method} {path} {status_code} {process_time_ms}ms",
                request_id=request_id,
                client_ip=client_ip,
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )

        return response
