"""Ports (interfaces) for the ports-and-adapters architecture."""

from train_board_proxy.domain.ports.board_provider import BoardProvider

__all__ = ["BoardProvider"]
