"""Domain contracts (protocols) implemented by adapters."""

from train_board_proxy.domain.contracts.board_formatter import BoardFormatterProtocol
from train_board_proxy.domain.contracts.page_fetcher import PageFetcherProtocol
from train_board_proxy.domain.contracts.rate_limiter import RateLimiterProtocol

__all__ = [
    "BoardFormatterProtocol",
    "PageFetcherProtocol",
    "RateLimiterProtocol",
]
