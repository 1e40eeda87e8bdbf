"""Uvicorn server wrapper for the board proxy application."""

import logging

import uvicorn
from starlette.applications import Starlette

logger = logging.getLogger(__name__)


class BoardProxyServer:
    """Runs the ASGI application with uvicorn until stopped."""

    def __init__(self, app: Starlette, host: str, port: int, log_level: str = "INFO") -> None:
        self.app = app
        self.host = host
        self.port = port
        self.log_level = log_level
        self._server: uvicorn.Server | None = None

    async def start(self) -> None:
        """Start serving; returns once the server has shut down."""
        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            log_level=self.log_level.lower(),
            access_log=False,
        )
        self._server = uvicorn.Server(config)
        logger.info(f"Train board proxy listening on http://{self.host}:{self.port}")
        await self._server.serve()

    async def stop(self) -> None:
        """Ask the running server to exit."""
        if self._server:
            self._server.should_exit = True
