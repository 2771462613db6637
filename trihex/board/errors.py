from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trihex.board.models import WireMove


class BoardError(Exception):
    """Base class for board model errors."""
    pass


class DecodeError(BoardError):
    """A piece key or wire payload does not have the expected shape."""
    pass


class ReconciliationMismatch(BoardError):
    """Wire move does not correspond to any currently legal oracle move."""

    def __init__(self, message: str, wire_move: WireMove | None = None):
        self.message = message
        self.wire_move = wire_move
        super().__init__(message)


class NotFound(ReconciliationMismatch):
    """No piece occupies the wire move's origin cell (position desync)."""
    pass


class OracleRejection(BoardError):
    """The rules oracle refused to commit a move."""

    def __init__(self, message: str, original: Exception | None = None):
        self.message = message
        self.original = original
        super().__init__(message)


class HistoryError(BoardError):
    """The history API could not be reached or returned a bad response."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
