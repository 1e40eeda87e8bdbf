"""Formatter for providers without a public departure feed."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markupsafe import Markup

from train_board_proxy.adapters.formatters.html_snippets import render_document

if TYPE_CHECKING:
    from train_board_proxy.domain.contracts import PageFetcherProtocol
    from train_board_proxy.domain.models import Station


class UnavailableBoardFormatter:
    """Returns a fixed informational page and never contacts the upstream."""

    async def render(self, station: Station, fetcher: PageFetcherProtocol) -> str:
        _ = fetcher
        return self.format(station)

    @staticmethod
    def format(station: Station) -> str:
        body = Markup(
            '<div class="notice"><h1>{name}</h1>'
            "<p>Live departures are not available for this station: "
            "{provider} does not offer a public departure feed.</p>"
            '<p><a href="/">Back to station selection</a></p></div>'
        ).format(name=station.name, provider=station.provider.value)
        return render_document(f"{station.name} - Departures unavailable", body)
