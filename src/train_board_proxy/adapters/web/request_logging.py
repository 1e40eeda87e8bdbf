"""Access log middleware: one line per request."""

import logging
import time
from collections.abc import Awaitable, Callable
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from train_board_proxy.adapters.web.rate_limit_middleware import extract_client_ip

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status, duration and client IP of each request."""

    def __init__(self, app: Callable, trust_forwarded_for: bool = False) -> None:
        super().__init__(app)
        self.trust_forwarded_for = trust_forwarded_for

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "request method=%s path=%s status=%s duration_ms=%.1f client=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extract_client_ip(request, self.trust_forwarded_for),
        )
        return response
