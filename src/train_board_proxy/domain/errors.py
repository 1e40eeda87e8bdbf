"""Error taxonomy for the train board proxy.

Every per-request failure is one of these types and is converted into a
user-facing response at the HTTP boundary. Only ``DataLoadError`` can be
fatal, and only at startup.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from train_board_proxy.domain.models.station import Station


class BoardProxyError(Exception):
    """Base class for all errors raised by the proxy."""


class ValidationErrorReason(StrEnum):
    MISSING_PARAMETER = "missing_parameter"


class ValidationError(BoardProxyError):
    """A request parameter is missing or invalid."""

    def __init__(self, reason: ValidationErrorReason, parameter: str) -> None:
        super().__init__(f"{reason.value}: {parameter}")
        self.reason = reason
        self.parameter = parameter


class StationNotFoundError(BoardProxyError):
    """No station matches the identifier; carries fuzzy-search suggestions."""

    def __init__(self, identifier: str, suggestions: Sequence[Station] = ()) -> None:
        super().__init__(f"Station not found: {identifier}")
        self.identifier = identifier
        self.suggestions = list(suggestions)


class RateLimitExceeded(BoardProxyError):
    """The client sent too many board requests within the window."""

    def __init__(self, client_key: str, retry_after: int) -> None:
        super().__init__(f"Rate limit exceeded for {client_key}")
        self.client_key = client_key
        self.retry_after = retry_after


class FetchErrorKind(StrEnum):
    TIMEOUT = "timeout"
    UPSTREAM_STATUS = "upstream_status"
    CONNECTION = "connection"
    DECODE = "decode"


class FetchError(BoardProxyError):
    """Upstream fetch failed after all attempts; ``cause`` is the last error."""

    def __init__(
        self,
        url: str,
        kind: FetchErrorKind,
        attempts: int,
        cause: BaseException | None = None,
        status: int | None = None,
    ) -> None:
        detail = f"HTTP {status}" if status is not None else _describe(cause)
        super().__init__(f"Fetching {url} failed after {attempts} attempt(s): {detail}")
        self.url = url
        self.kind = kind
        self.attempts = attempts
        self.cause = cause
        self.status = status


class FormatErrorReason(StrEnum):
    MALFORMED_FEED = "malformed_feed"
    EMPTY_PAGE = "empty_page"


class FormatError(BoardProxyError):
    """The upstream response does not have the expected shape."""

    def __init__(self, reason: FormatErrorReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class BoardUnavailableError(BoardProxyError):
    """A board could not be produced because of a fetch or format failure."""

    def __init__(self, station: Station, cause: FetchError | FormatError) -> None:
        super().__init__(str(cause))
        self.station = station
        self.cause = cause


class DataLoadError(BoardProxyError):
    """The station directory source is malformed."""


def _describe(cause: BaseException | None) -> str:
    if cause is None:
        return "unknown error"
    text = str(cause)
    return f"{type(cause).__name__}: {text}" if text else type(cause).__name__
