"""Domain models for the train board proxy."""

from train_board_proxy.domain.models.board import Board
from train_board_proxy.domain.models.fetch_result import FetchResult
from train_board_proxy.domain.models.station import ProviderType, Station
from train_board_proxy.domain.models.station_directory import StationDirectory
from train_board_proxy.domain.models.swiss_feed import (
    FeedDeparture,
    FeedStation,
    FeedStop,
    SwissFeed,
)

__all__ = [
    "Board",
    "FeedDeparture",
    "FeedStation",
    "FeedStop",
    "FetchResult",
    "ProviderType",
    "Station",
    "StationDirectory",
    "SwissFeed",
]
