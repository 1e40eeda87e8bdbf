"""Outbound HTTP: resilient fetching, backoff, decompression and pacing."""

from train_board_proxy.adapters.http.backoff import BackoffPolicy
from train_board_proxy.adapters.http.resilient_fetcher import ResilientFetcher
from train_board_proxy.adapters.http.upstream_throttle import UpstreamThrottle
from train_board_proxy.adapters.http.user_agents import USER_AGENTS, UserAgentRotator

__all__ = [
    "USER_AGENTS",
    "BackoffPolicy",
    "ResilientFetcher",
    "UpstreamThrottle",
    "UserAgentRotator",
]
