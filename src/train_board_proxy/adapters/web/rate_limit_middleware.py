"""Global per-IP request throttle for every route, using throttled-py."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

logger = logging.getLogger(__name__)

# Health checks and static assets are never throttled
EXEMPT_PATH_PREFIXES: tuple[str, ...] = ("/health", "/static/")


def extract_client_ip(request: Request, trust_forwarded_for: bool = False) -> str:
    """Extract client IP address from request.

    X-Forwarded-For is honoured only with ``trust_forwarded_for`` set, for
    deployments behind a reverse proxy that writes it. The header may contain
    a chain (client, proxy1, proxy2); the first entry is the original client.
    """
    forwarded_for = request.headers.get("X-Forwarded-For") if trust_forwarded_for else None
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    if request.client and request.client.host:
        return request.client.host

    logger.warning("Could not determine client IP, using 'unknown'")
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token-bucket limit per IP across all routes.

    Board requests are additionally subject to the stricter sliding-window
    limiter of the board endpoint.
    """

    def __init__(
        self,
        app: Callable,
        requests_per_minute: int = 100,
        trust_forwarded_for: bool = False,
    ) -> None:
        """Initialize rate limiting middleware.

        Args:
            app: The ASGI application to wrap.
            requests_per_minute: Maximum number of requests allowed per IP per minute.
                Zero or less disables the limit.
            trust_forwarded_for: Key clients on X-Forwarded-For instead of the peer address.
        """
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.trust_forwarded_for = trust_forwarded_for
        self.rate_limiter_store = store.MemoryStore()
        if requests_per_minute <= 0:
            self.quota = None
            logger.info("Global rate limiting disabled")
            return
        self.quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
        logger.info(f"Global rate limiting enabled: {requests_per_minute} requests per minute per IP")

    def _extract_retry_after(self, result: Any) -> float:
        """Extract retry_after value from rate limit result."""
        retry_after: float = 60.0
        state = getattr(result, "state", None)
        if state is not None and hasattr(state, "retry_after"):
            retry_after = float(getattr(state, "retry_after", 60.0))
        elif hasattr(result, "retry_after"):
            retry_after = float(getattr(result, "retry_after", 60.0))
        return retry_after

    def _create_rate_limit_response(self, client_ip: str, retry_after: float) -> Response:
        logger.warning(f"Global rate limit exceeded for IP {client_ip}, retry after {retry_after}s")
        return JSONResponse(
            {"error": "Too Many Requests", "retryAfter": max(1, int(retry_after))},
            status_code=429,
            headers={"Retry-After": str(max(1, int(retry_after)))},
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and enforce rate limiting."""
        if self.quota is None or request.url.path.startswith(EXEMPT_PATH_PREFIXES):
            return await call_next(request)

        client_ip = extract_client_ip(request, self.trust_forwarded_for)
        throttle = Throttled(
            key=client_ip,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self.quota,
            store=self.rate_limiter_store,
        )

        result = throttle.limit()
        if result.limited:
            return self._create_rate_limit_response(client_ip, self._extract_retry_after(result))

        response: Response = await call_next(request)
        return response
