"""HTML formatter with a second chance for providers that sometimes serve a search form."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING
from urllib.parse import quote

from bs4 import BeautifulSoup

from train_board_proxy.adapters.formatters.cleanup_rules import DEFAULT_CLEANUP_RULES, CleanupRules
from train_board_proxy.adapters.formatters.html_passthrough import HtmlPassthroughFormatter

if TYPE_CHECKING:
    from train_board_proxy.domain.contracts import PageFetcherProtocol
    from train_board_proxy.domain.models import FetchResult, Station

logger = logging.getLogger(__name__)

_STATION_INPUT_ID = re.compile("HFS_input", re.IGNORECASE)
_BOARD_FORM_ACTION = re.compile("bhftafel", re.IGNORECASE)


def looks_like_search_form(html: str) -> bool:
    """True if the page is a station search form rather than a departure board.

    Markers: a station-code input field (``name="input"`` or an id containing
    ``HFS_input``), or a form posting to the board endpoint, while no result
    table is present.
    """
    soup = BeautifulSoup(html, "html.parser")
    if soup.find("table", class_="result") is not None:
        return False
    has_station_input = (
        soup.find("input", attrs={"name": "input"}) is not None
        or soup.find("input", id=_STATION_INPUT_ID) is not None
    )
    has_board_form = soup.find("form", action=_BOARD_FORM_ACTION) is not None
    return has_station_input or has_board_form


class SearchFormFallbackFormatter(HtmlPassthroughFormatter):
    """Passthrough formatter that re-fetches from an alternate URL once.

    Recoverable: when the primary page is a station search form, the board
    is fetched from ``fallback_url_template`` (``{code}`` is replaced by the
    URL-encoded station code) and that page is used instead. This is a
    single extra hop; the fallback page is never checked again.

    Unrecoverable: a failing fallback fetch propagates as ``FetchError``;
    an empty page raises ``FormatError``.
    """

    def __init__(
        self,
        fallback_url_template: str,
        rules: CleanupRules = DEFAULT_CLEANUP_RULES,
        refresh_seconds: int = 60,
    ) -> None:
        super().__init__(rules, refresh_seconds)
        self.fallback_url_template = fallback_url_template

    def fallback_url(self, station: Station) -> str:
        return self.fallback_url_template.format(code=quote(station.code, safe=""))

    async def follow_up(
        self, station: Station, result: FetchResult, fetcher: PageFetcherProtocol
    ) -> FetchResult:
        if not looks_like_search_form(result.body):
            return result
        url = self.fallback_url(station)
        logger.info(f"{station.name}: primary page is a search form, retrying via {url}")
        return await fetcher.fetch(url, dict(self.fetch_headers) or None)
