"""GET /board: converts board results and errors into HTTP responses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

from starlette.responses import HTMLResponse, JSONResponse, Response

from train_board_proxy.adapters.web.error_pages import (
    render_missing_parameter_page,
    render_rate_limited_page,
    render_upstream_error_page,
    upstream_status_code,
)
from train_board_proxy.adapters.web.rate_limit_middleware import extract_client_ip
from train_board_proxy.domain.errors import (
    BoardUnavailableError,
    RateLimitExceeded,
    StationNotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    from starlette.requests import Request

    from train_board_proxy.domain.models import Board
    from train_board_proxy.domain.ports import BoardProvider

logger = logging.getLogger(__name__)

BOARD_USAGE = "/board?station=milano-centrale"

NO_CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def header_safe(value: str) -> str:
    """Header value as-is when Latin-1 encodable, percent-encoded otherwise."""
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        return quote(value, safe=" ()'-.,")
    return value


class BoardEndpoint:
    """HTTP boundary of the board orchestrator."""

    def __init__(
        self,
        board_service: BoardProvider,
        error_refresh_seconds: int = 30,
        trust_forwarded_for: bool = False,
    ) -> None:
        self.board_service = board_service
        self.error_refresh_seconds = error_refresh_seconds
        self.trust_forwarded_for = trust_forwarded_for

    async def handle(self, request: Request) -> Response:
        """Serve the board named by the ``station`` (or ``city``) query parameter."""
        identifier = request.query_params.get("station") or request.query_params.get("city")
        client_ip = extract_client_ip(request, self.trust_forwarded_for)

        try:
            board = await self.board_service.get_board(identifier, client_ip)
        except ValidationError as e:
            return HTMLResponse(
                render_missing_parameter_page(e.parameter, BOARD_USAGE), status_code=400
            )
        except RateLimitExceeded as e:
            logger.warning(f"Board rate limit exceeded for {e.client_key}")
            return HTMLResponse(
                render_rate_limited_page(e.retry_after),
                status_code=429,
                headers={"Retry-After": str(e.retry_after)},
            )
        except StationNotFoundError as e:
            return self._not_found(e)
        except BoardUnavailableError as e:
            status_code = upstream_status_code(e)
            return HTMLResponse(
                render_upstream_error_page(e, status_code, self.error_refresh_seconds),
                status_code=status_code,
                headers=NO_CACHE_HEADERS,
            )

        return self._board_response(board)

    @staticmethod
    def _board_response(board: Board) -> Response:
        headers = {
            **NO_CACHE_HEADERS,
            "X-Station-Name": header_safe(board.station.name),
            "X-Station-Country": header_safe(board.station.country),
        }
        return HTMLResponse(board.html, headers=headers)

    @staticmethod
    def _not_found(error: StationNotFoundError) -> Response:
        return JSONResponse(
            {
                "error": "Station not found",
                "identifier": error.identifier,
                "suggestions": [
                    {
                        "name": s.name,
                        "city": s.city,
                        "country": s.country,
                        "slug": s.slug,
                        "url": s.board_path,
                    }
                    for s in error.suggestions
                ],
                "usage": BOARD_USAGE,
            },
            status_code=404,
        )
