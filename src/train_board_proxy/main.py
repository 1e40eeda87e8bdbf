"""Main entry point for the train board proxy."""

import asyncio
import logging
import sys

from train_board_proxy.adapters.config import AppConfig, StationDirectoryLoader
from train_board_proxy.adapters.formatters import DEFAULT_CLEANUP_RULES, build_formatter_registry
from train_board_proxy.adapters.http import (
    BackoffPolicy,
    ResilientFetcher,
    UpstreamThrottle,
)
from train_board_proxy.adapters.web import (
    BoardProxyServer,
    SlidingWindowRateLimiter,
    create_app,
)
from train_board_proxy.application.services import BoardService
from train_board_proxy.domain.errors import DataLoadError
from train_board_proxy.domain.models import StationDirectory

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def load_directory(config: AppConfig) -> StationDirectory:
    """Load the station directory, falling back to built-ins if allowed."""
    try:
        return StationDirectoryLoader.load(config.stations_file)
    except DataLoadError as e:
        if not config.allow_builtin_fallback:
            logger.error(f"Invalid station data: {e}")
            sys.exit(1)
        logger.error(f"Invalid station data, serving the built-in station list instead: {e}")
        return StationDirectoryLoader.builtin()


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()

    try:
        cleanup_overrides = config.get_cleanup_overrides()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration file: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)

    directory = load_directory(config)
    if len(directory) == 0:
        logger.error("No stations configured.")
        logger.error("Add stations to your stations.json or remove it to use the built-in list.")
        sys.exit(1)
    logger.info(f"Serving {len(directory)} station(s) in {len(directory.countries)} country(ies)")

    backoff = BackoffPolicy(
        base_delay=config.fetch_base_delay_ms / 1000,
        max_delay=config.fetch_max_delay_ms / 1000,
        jitter=config.fetch_jitter_ms / 1000,
    )
    rate_limiter = SlidingWindowRateLimiter(
        max_requests=config.board_rate_limit,
        window_seconds=config.board_rate_window_seconds,
        max_tracked_clients=config.rate_limit_max_tracked_clients,
    )
    formatters = build_formatter_registry(
        config.db_fallback_url_template,
        DEFAULT_CLEANUP_RULES.with_overrides(cleanup_overrides),
        config.auto_refresh_seconds,
    )

    # One session for all upstream requests; bodies are decompressed by the fetcher
    async with ResilientFetcher.create_session() as session:
        fetcher = ResilientFetcher(
            session,
            backoff=backoff,
            timeout_seconds=config.fetch_timeout_seconds,
            max_retries=config.fetch_max_retries,
            throttle=UpstreamThrottle(config.upstream_min_delay_seconds),
        )
        board_service = BoardService(
            directory,
            rate_limiter,
            fetcher,
            formatters,
            suggestion_limit=config.suggestion_limit,
        )

        app = create_app(config, directory, board_service)
        server = BoardProxyServer(app, config.host, config.port, config.log_level)

        try:
            await server.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await server.stop()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
