"""User-facing error pages of the board endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markupsafe import Markup

from train_board_proxy.adapters.formatters.html_snippets import render_document
from train_board_proxy.domain.errors import (
    BoardUnavailableError,
    FetchError,
    FetchErrorKind,
)

if TYPE_CHECKING:
    from train_board_proxy.domain.models import Station

_BACK_LINK = Markup('<p><a href="/">Back to station selection</a></p>')

_UPSTREAM_TITLES: dict[int, str] = {
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
}


def upstream_status_code(error: BoardUnavailableError) -> int:
    """504 for timeouts, 502 for upstream error statuses, 503 otherwise."""
    cause = error.cause
    if isinstance(cause, FetchError):
        if cause.kind is FetchErrorKind.TIMEOUT:
            return 504
        if cause.kind is FetchErrorKind.UPSTREAM_STATUS:
            return 502
    return 503


def _notice(title: str, message: str, details: Markup = Markup("")) -> Markup:
    return Markup('<div class="notice"><h1>{}</h1><p>{}</p>{}{}</div>').format(
        title, message, details, _BACK_LINK
    )


def render_missing_parameter_page(parameter: str, usage: str) -> str:
    body = _notice(
        "Bad Request",
        f'Missing "{parameter}" parameter. Usage: {usage}',
    )
    return render_document("Bad Request", body)


def render_rate_limited_page(retry_after: int) -> str:
    body = _notice(
        "Too Many Requests",
        f"Too many departure board requests. Please try again in {retry_after} seconds.",
    )
    return render_document("Too Many Requests", body)


def render_upstream_error_page(
    error: BoardUnavailableError, status_code: int, refresh_seconds: int = 30
) -> str:
    """Error page with enough detail for operators and an auto-retry hint."""
    station: Station = error.station
    title = _UPSTREAM_TITLES.get(status_code, "Service Unavailable")
    message = (
        "The railway website did not answer in time."
        if status_code == 504
        else "Departure data is temporarily unavailable."
    )
    details = Markup(
        '<p class="detail">Station: {name} ({country})</p>'
        '<p class="detail">Provider: {provider}</p>'
        '<p class="detail">Error: {error}</p>'
        '<p class="detail">Source: <a href="{url}">{url}</a></p>'
        '<p class="retry">This page retries automatically in {refresh} seconds.</p>'
    ).format(
        name=station.name,
        country=station.country,
        provider=station.provider.value,
        error=str(error.cause),
        url=station.url,
        refresh=refresh_seconds,
    )
    return render_document(f"{title} - {station.name}", _notice(title, message, details), refresh_seconds)
