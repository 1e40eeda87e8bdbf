"""Rendered departure board."""

from dataclasses import dataclass

from train_board_proxy.domain.models.station import Station


@dataclass(frozen=True)
class Board:
    """HTML departure board for one station, ready to serve."""

    station: Station
    html: str
