"""Formatter for structured JSON stationboard feeds (SBB)."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from markupsafe import Markup
from pydantic import ValidationError as PydanticValidationError

from train_board_proxy.adapters.formatters.base import FetchingBoardFormatter
from train_board_proxy.adapters.formatters.html_snippets import render_document
from train_board_proxy.domain.errors import FormatError, FormatErrorReason
from train_board_proxy.domain.models.swiss_feed import FeedDeparture, SwissFeed

if TYPE_CHECKING:
    from collections.abc import Mapping

    from train_board_proxy.domain.models import FetchResult, Station

TIME_PLACEHOLDER = "--:--"
UNKNOWN_DESTINATION = "Unknown"
NO_PLATFORM = "-"

_HEADER_ROW = Markup(
    "<tr><th>Time</th><th>Train</th><th>Destination</th><th>Platform</th><th>Delay</th></tr>"
)


class StructuredFeedFormatter(FetchingBoardFormatter):
    """Renders a JSON departure feed into an HTML table.

    Unrecoverable: a body that is not valid JSON or does not match the feed
    schema raises ``FormatError(MALFORMED_FEED)``. There is no alternate
    fetch for this variant.
    """

    fetch_headers: ClassVar[Mapping[str, str]] = {"Accept": "application/json"}

    def __init__(self, refresh_seconds: int = 60) -> None:
        self.refresh_seconds = refresh_seconds

    def format(self, station: Station, result: FetchResult) -> str:
        feed = self.parse(result.body)
        title = feed.station_name or station.name
        rows = Markup("").join(self.render_row(dep) for dep in feed.departures)
        body = Markup(
            '<div class="board"><h1>{title} - Departures</h1>'
            '<table class="departures"><thead>{header}</thead><tbody>{rows}</tbody></table>'
            "</div>"
        ).format(title=title, header=_HEADER_ROW, rows=rows)
        return render_document(f"{title} - Departures", body, self.refresh_seconds)

    @staticmethod
    def parse(body: str) -> SwissFeed:
        try:
            return SwissFeed.model_validate_json(body)
        except PydanticValidationError as e:
            raise FormatError(
                FormatErrorReason.MALFORMED_FEED, f"Malformed departure feed: {e}"
            ) from e

    @staticmethod
    def render_delay(delay: int | None) -> Markup:
        """``+N'`` for late trains, ``-N'`` for early ones, nothing when on time."""
        if not delay:
            return Markup("")
        if delay > 0:
            return Markup('<span class="delay-indicator">+{}\'</span>').format(delay)
        return Markup('<span class="early-indicator">{}\'</span>').format(delay)

    @staticmethod
    def render_row(departure: FeedDeparture) -> Markup:
        when = departure.departure_time
        time_text = when.strftime("%H:%M") if when else TIME_PLACEHOLDER
        delay_cell = StructuredFeedFormatter.render_delay(departure.stop.delay)
        return Markup(
            '<tr><td class="time">{time}</td><td class="train">{train}</td>'
            '<td class="destination">{destination}</td><td class="platform">{platform}</td>'
            '<td class="delay">{delay}</td></tr>'
        ).format(
            time=time_text,
            train=departure.train,
            destination=departure.destination or UNKNOWN_DESTINATION,
            platform=departure.stop.platform or NO_PLATFORM,
            delay=delay_cell,
        )
