"""Configuration adapters."""

from train_board_proxy.adapters.config.app_config import AppConfig
from train_board_proxy.adapters.config.station_directory_loader import (
    StationDirectoryLoader,
    StationRecord,
)

__all__ = ["AppConfig", "StationDirectoryLoader", "StationRecord"]
