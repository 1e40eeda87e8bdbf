"""Starlette application: routes, error handlers and middleware."""

from __future__ import annotations

import logging
import time
from collections import Counter
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from train_board_proxy import __version__
from train_board_proxy.adapters.web.board_endpoint import BOARD_USAGE, BoardEndpoint
from train_board_proxy.adapters.web.rate_limit_middleware import RateLimitMiddleware
from train_board_proxy.adapters.web.request_logging import RequestLoggingMiddleware
from train_board_proxy.adapters.web.security_headers import SecurityHeadersMiddleware
from train_board_proxy.adapters.web.static_file_server import (
    StaticFileServer,
    resolve_static_dir,
)

if TYPE_CHECKING:
    from starlette.requests import Request

    from train_board_proxy.adapters.config import AppConfig
    from train_board_proxy.domain.models import StationDirectory
    from train_board_proxy.domain.ports import BoardProvider

logger = logging.getLogger(__name__)

ENDPOINTS: dict[str, str] = {
    "/": "Station selector",
    "/health": "Service health",
    "/stations/list": "All stations, optionally ?country=CODE",
    "/stations/search": "Search stations with ?q=TEXT",
    "/board": "Departure board with ?station=SLUG_OR_CODE",
}


class StationRoutes:
    """Handlers of the JSON discovery endpoints."""

    def __init__(
        self,
        directory: StationDirectory,
        search_result_limit: int = 10,
        started_at: float | None = None,
    ) -> None:
        self.directory = directory
        self.search_result_limit = search_result_limit
        self.started_at = time.monotonic() if started_at is None else started_at

    async def health(self, _request: Request) -> Response:
        """Health check endpoint for load balancers and monitoring."""
        return JSONResponse(
            {
                "status": "ok",
                "timestamp": datetime.now(UTC).isoformat(),
                "uptime": round(time.monotonic() - self.started_at, 3),
                "stations": len(self.directory),
                "countries": sorted(self.directory.countries),
                "version": __version__,
            }
        )

    async def list_stations(self, request: Request) -> Response:
        country = request.query_params.get("country")
        stations = self.directory.list(country)
        return JSONResponse(
            {
                "totalStations": len(stations),
                "countries": dict(Counter(s.country for s in stations)),
                "stations": [s.summary() for s in stations],
            }
        )

    async def search(self, request: Request) -> Response:
        query = (request.query_params.get("q") or "").strip()
        if not query:
            return JSONResponse(
                {"error": "Missing 'q' parameter", "usage": "/stations/search?q=milano"},
                status_code=400,
            )
        results = self.directory.search(query, limit=self.search_result_limit)
        return JSONResponse(
            {
                "query": query,
                "count": len(results),
                "results": [s.summary() for s in results],
            }
        )


def _index_handler(static_server: StaticFileServer) -> Any:
    async def index(_request: Request) -> Response:
        response = static_server.index_response()
        if response is not None:
            return response
        return JSONResponse(
            {
                "service": "train-board-proxy",
                "version": __version__,
                "endpoints": ENDPOINTS,
                "example": BOARD_USAGE,
            }
        )

    return index


async def not_found(request: Request, _exc: Exception) -> Response:
    return JSONResponse(
        {"error": "Not found", "path": request.url.path, "endpoints": ENDPOINTS},
        status_code=404,
    )


async def server_error(request: Request, exc: Exception) -> Response:
    logger.error(f"Unhandled error on {request.url.path}: {exc!r}", exc_info=exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


async def http_error(_request: Request, exc: HTTPException) -> Response:
    return JSONResponse(
        {"error": exc.detail}, status_code=exc.status_code, headers=exc.headers
    )


def create_app(
    config: AppConfig,
    directory: StationDirectory,
    board_service: BoardProvider,
    static_dir: str | None = None,
) -> Starlette:
    """Build the ASGI application.

    Args:
        config: Application configuration.
        directory: Station directory served by the listing endpoints.
        board_service: Orchestrator behind ``/board``.
        static_dir: Overrides ``config.static_dir`` when given.
    """
    station_routes = StationRoutes(directory, search_result_limit=config.search_result_limit)
    static_server = StaticFileServer(resolve_static_dir(static_dir or config.static_dir))
    board_endpoint = BoardEndpoint(
        board_service,
        error_refresh_seconds=config.error_refresh_seconds,
        trust_forwarded_for=config.trust_forwarded_for,
    )

    routes = [
        Route("/", _index_handler(static_server), methods=["GET"]),
        Route("/health", station_routes.health, methods=["GET"]),
        Route("/stations/list", station_routes.list_stations, methods=["GET"]),
        Route("/stations/search", station_routes.search, methods=["GET"]),
        Route("/board", board_endpoint.handle, methods=["GET"]),
        *static_server.mount(),
    ]

    middleware = [
        Middleware(SecurityHeadersMiddleware),
        Middleware(RequestLoggingMiddleware, trust_forwarded_for=config.trust_forwarded_for),
        Middleware(
            RateLimitMiddleware,
            requests_per_minute=config.rate_limit_per_minute,
            trust_forwarded_for=config.trust_forwarded_for,
        ),
    ]

    return Starlette(
        routes=routes,
        middleware=middleware,
        exception_handlers={
            404: not_found,
            500: server_error,
            HTTPException: http_error,
        },
    )
