"""Application services."""

from train_board_proxy.application.services.board_service import BoardService

__all__ = ["BoardService"]
