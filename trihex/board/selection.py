from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from trihex.board.models import Cell, Color, Move, parse_moves
from trihex.board.piece_key import key_of
from trihex.board.reconcile import commit

if TYPE_CHECKING:
    from trihex.board.models import Piece
    from trihex.board.protocol import RulesOracle

logger = logging.getLogger(__name__)


class SelectionState(str, Enum):
    IDLE = "idle"
    SELECTED = "selected"


class SelectionMachine:
    """
    Tracks the selected piece of one interactive board.

    Transitions:
    - IDLE -> SELECTED(p) when the turn-holder clicks their piece p
    - SELECTED(p) -> IDLE when p is clicked again
    - SELECTED(p) -> SELECTED(p2) when another own piece is clicked
    - SELECTED(p) -> IDLE after every successful commit

    Legal moves for the selected piece are re-queried on every call.
    """

    def __init__(self, oracle: RulesOracle) -> None:
        self._oracle = oracle
        self._selected: Piece | None = None

    @property
    def selected(self) -> Piece | None:
        return self._selected

    @property
    def selected_key(self) -> str | None:
        return key_of(self._selected) if self._selected is not None else None

    @property
    def state(self) -> SelectionState:
        return SelectionState.IDLE if self._selected is None else SelectionState.SELECTED

    def click(self, piece: Piece, current_turn: Color) -> SelectionState:
        if piece.owner != current_turn:
            return self.state

        if self._selected is not None and key_of(self._selected) == key_of(piece):
            self._selected = None
        else:
            self._selected = piece
        return self.state

    def legal_moves(self) -> list[Move]:
        if self._selected is None:
            return []
        return parse_moves(self._oracle.query_moves(self._selected.cell))

    def move_to(self, cell: Cell) -> Move | None:
        """Return the legal move of the selected piece landing on ``cell``."""
        for move in self.legal_moves():
            if move.to_cell.key == cell.key:
                return move
        return None

    def commit(self, move: Move) -> Move:
        """Commit ``move`` and return to IDLE once the oracle has advanced."""
        commit(self._oracle, move)
        logger.debug(f"Committed {move.piece.name} {move.from_cell.key} -> {move.to_cell.key}")
        self._selected = None
        return move

    def reset(self) -> None:
        self._selected = None
