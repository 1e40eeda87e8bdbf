"""Web adapters: HTTP routes, middleware and server."""

from train_board_proxy.adapters.web.app import create_app
from train_board_proxy.adapters.web.board_endpoint import BoardEndpoint
from train_board_proxy.adapters.web.rate_limit_middleware import (
    RateLimitMiddleware,
    extract_client_ip,
)
from train_board_proxy.adapters.web.security_headers import SecurityHeadersMiddleware
from train_board_proxy.adapters.web.server import BoardProxyServer
from train_board_proxy.adapters.web.sliding_window_limiter import SlidingWindowRateLimiter

__all__ = [
    "BoardEndpoint",
    "BoardProxyServer",
    "RateLimitMiddleware",
    "SecurityHeadersMiddleware",
    "SlidingWindowRateLimiter",
    "create_app",
    "extract_client_ip",
]
