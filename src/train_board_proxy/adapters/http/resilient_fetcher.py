"""Resilient fetcher for railway websites and APIs.

Issues browser-like GET requests with aiohttp, decodes compressed bodies
explicitly and retries transient failures with exponential backoff plus
jitter. Network errors, timeouts, undecodable bodies and HTTP 5xx are
retried; HTTP 4xx is terminal.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

import aiohttp

from train_board_proxy.adapters.http.api_request_logger import log_outbound_request
from train_board_proxy.adapters.http.backoff import BackoffPolicy
from train_board_proxy.adapters.http.decompression import DecompressionError, decompress_body
from train_board_proxy.adapters.http.user_agents import UserAgentRotator
from train_board_proxy.domain.errors import FetchError, FetchErrorKind
from train_board_proxy.domain.models.fetch_result import FetchResult

if TYPE_CHECKING:
    from train_board_proxy.adapters.http.upstream_throttle import UpstreamThrottle

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 5

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
    "Cache-Control": "no-cache",
}


class UpstreamStatusError(Exception):
    """The upstream answered with an error status."""

    def __init__(self, status: int, reason: str | None = None) -> None:
        super().__init__(f"HTTP {status} {reason or ''}".strip())
        self.status = status


def referer_for(url: str) -> str:
    """Origin of ``url`` with a trailing slash, used as Referer."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}/"


class ResilientFetcher:
    """Fetches upstream pages with retries, backoff, jitter and UA rotation."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        user_agents: UserAgentRotator | None = None,
        backoff: BackoffPolicy | None = None,
        timeout_seconds: float = 20.0,
        max_retries: int = 3,
        throttle: UpstreamThrottle | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        """Initialize the fetcher.

        Args:
            session: aiohttp session created with ``auto_decompress=False``
                (see ``create_session``); bodies are decoded here.
            user_agents: Rotator supplying the User-Agent per attempt.
            backoff: Delay policy between attempts.
            timeout_seconds: Total timeout of a single attempt.
            max_retries: Default total number of attempts.
            throttle: Optional per-host pacing of outbound requests.
            sleep: Coroutine used to wait between attempts.
        """
        if session.auto_decompress is True:
            raise ValueError("ResilientFetcher needs a session with auto_decompress=False")
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self._session = session
        self._user_agents = user_agents or UserAgentRotator()
        self._backoff = backoff or BackoffPolicy()
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._max_retries = max_retries
        self._throttle = throttle
        self._sleep = sleep

    @staticmethod
    def create_session() -> aiohttp.ClientSession:
        """Session suitable for this fetcher (bodies are decompressed manually)."""
        return aiohttp.ClientSession(auto_decompress=False)

    def build_headers(
        self, url: str, header_overrides: Mapping[str, str] | None = None
    ) -> dict[str, str]:
        """Browser-like request headers for ``url`` with overrides applied last."""
        headers = {
            "User-Agent": self._user_agents.next(),
            **DEFAULT_HEADERS,
            "Referer": referer_for(url),
        }
        if header_overrides:
            headers.update(header_overrides)
        return headers

    async def fetch(
        self,
        url: str,
        header_overrides: Mapping[str, str] | None = None,
        max_retries: int | None = None,
        base_delay: float | None = None,
    ) -> FetchResult:
        """Fetch ``url``, retrying transient failures.

        Args:
            url: Upstream URL.
            header_overrides: Headers replacing the defaults.
            max_retries: Total number of attempts (default from constructor).
            base_delay: First backoff delay in seconds (default from policy).

        Returns:
            Decoded response of the first successful attempt.

        Raises:
            FetchError: On a 4xx response, or with the last error once all
                attempts failed.
        """
        attempts = max_retries if max_retries is not None else self._max_retries
        if attempts < 1:
            raise ValueError("max_retries must be at least 1")
        policy = self._backoff if base_delay is None else self._backoff.with_base_delay(base_delay)
        host = urlsplit(url).hostname or ""

        last_error: FetchError | None = None
        for attempt in range(1, attempts + 1):
            if attempt > 1:
                delay = policy.delay_for(attempt)
                logger.info(f"Retrying {url} in {delay:.2f}s (attempt {attempt}/{attempts})")
                await self._sleep(delay)

            if self._throttle is not None:
                await self._throttle.acquire(host)

            try:
                return await self._attempt(url, header_overrides, attempt)
            except FetchError as e:
                if e.kind is FetchErrorKind.UPSTREAM_STATUS and e.status is not None:
                    if e.status < 500:
                        logger.warning(f"{url} answered HTTP {e.status}, not retrying")
                        raise
                last_error = e
                logger.warning(f"Attempt {attempt}/{attempts} for {url} failed: {e.cause}")

        assert last_error is not None
        logger.error(f"Giving up on {url} after {attempts} attempt(s)")
        raise FetchError(
            url,
            last_error.kind,
            attempts=attempts,
            cause=last_error.cause,
            status=last_error.status,
        )

    async def _attempt(
        self, url: str, header_overrides: Mapping[str, str] | None, attempt: int
    ) -> FetchResult:
        headers = self.build_headers(url, header_overrides)
        log_outbound_request("GET", url, attempt, headers)

        try:
            async with self._session.get(
                url,
                headers=headers,
                timeout=self._timeout,
                allow_redirects=True,
                max_redirects=MAX_REDIRECTS,
            ) as response:
                raw = await response.read()
                status = response.status
                final_url = str(response.url)
                content_encoding = response.headers.get("Content-Encoding")
                charset = response.charset
                response_headers = {k: v for k, v in response.headers.items()}
                reason = response.reason
        except TimeoutError as e:
            raise FetchError(url, FetchErrorKind.TIMEOUT, attempt, cause=e) from e
        except aiohttp.ClientError as e:
            raise FetchError(url, FetchErrorKind.CONNECTION, attempt, cause=e) from e

        if status >= 400:
            cause = UpstreamStatusError(status, reason)
            raise FetchError(
                url, FetchErrorKind.UPSTREAM_STATUS, attempt, cause=cause, status=status
            )

        try:
            body = decompress_body(raw, content_encoding)
        except DecompressionError as e:
            raise FetchError(url, FetchErrorKind.DECODE, attempt, cause=e) from e

        return FetchResult(
            url=final_url,
            status=status,
            body=_decode_text(body, charset),
            headers=response_headers,
            attempts=attempt,
        )


def _decode_text(body: bytes, charset: str | None) -> str:
    try:
        return body.decode(charset or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")
