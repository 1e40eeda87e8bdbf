"""Static asset serving: station selector page and /static mount."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from starlette.responses import FileResponse, Response
from starlette.routing import Mount
from starlette.staticfiles import StaticFiles

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, MutableMapping

logger = logging.getLogger(__name__)

STATIC_CACHE_CONTROL = b"public, max-age=60, must-revalidate"


class StaticFileCacheApp:
    """ASGI app wrapper that adds cache headers to static file responses."""

    def __init__(self, static_files: StaticFiles) -> None:
        self.static_files = static_files

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[[], Awaitable[dict[str, Any]]],
        send: Callable[[MutableMapping[str, Any]], Awaitable[None]],
    ) -> None:
        """Handle ASGI request and add cache headers."""

        async def send_with_cache_headers(message: MutableMapping[str, Any]) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                if not any(header[0].lower() == b"cache-control" for header in headers):
                    headers.append((b"cache-control", STATIC_CACHE_CONTROL))
                    message["headers"] = headers
            await send(message)

        await self.static_files(scope, receive, send_with_cache_headers)


def resolve_static_dir(configured: str | None = None) -> Path | None:
    """First existing static directory: configured, working directory, project root."""
    candidates = [Path(configured)] if configured else []
    candidates += [
        Path.cwd() / "static",
        Path(__file__).parent.parent.parent.parent.parent / "static",
    ]
    for path in candidates:
        if path.is_dir():
            return path
    logger.warning(f"Static directory not found at any of: {[str(p) for p in candidates]}")
    return None


class StaticFileServer:
    """Serves the station selector page and other static assets."""

    def __init__(self, static_dir: Path | None) -> None:
        self.static_dir = static_dir

    @property
    def index_path(self) -> Path | None:
        if self.static_dir is None:
            return None
        index = self.static_dir / "index.html"
        return index if index.is_file() else None

    def mount(self) -> list[Mount]:
        """Routes mounting the static directory, if there is one."""
        if self.static_dir is None:
            return []
        static_files = StaticFiles(directory=str(self.static_dir))
        logger.info(f"Mounted static files from {self.static_dir} with 1-minute cache headers")
        return [Mount("/static", app=StaticFileCacheApp(static_files), name="static")]

    def index_response(self) -> Response | None:
        """The selector page, or None when no index.html is available."""
        index = self.index_path
        if index is None:
            return None
        return FileResponse(str(index), media_type="text/html")
