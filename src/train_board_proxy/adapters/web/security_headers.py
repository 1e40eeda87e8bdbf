"""Hardening headers added to every response."""

from collections.abc import Awaitable, Callable, Mapping

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Content-Security-Policy stays unset: boards embed upstream scripts and styles
SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "X-XSS-Protection": "0",
}

HSTS_HEADER = ("Strict-Transport-Security", "max-age=15552000; includeSubDomains")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set security headers a handler has not set itself."""

    def __init__(self, app: Callable, headers: Mapping[str, str] | None = None) -> None:
        super().__init__(app)
        self.headers = dict(SECURITY_HEADERS if headers is None else headers)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        if request.url.scheme == "https":
            response.headers.setdefault(*HSTS_HEADER)
        return response
