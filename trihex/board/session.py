from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from trihex.board.errors import BoardError, DecodeError, OracleRejection, ReconciliationMismatch
from trihex.board.hexgrid import BoardLayout
from trihex.board.models import (
    Cell,
    Color,
    GameSnapshot,
    Move,
    Orientation,
    Piece,
    WireMove,
    parse_pieces,
    parse_snapshot,
)
from trihex.board.piece_key import find_piece
from trihex.board.reconcile import commit, reconcile
from trihex.board.selection import SelectionMachine, SelectionState
from trihex.board.view import BoardView, build_board_view, marker_at, piece_at
from trihex.config import settings

if TYPE_CHECKING:
    from trihex.board.protocol import RulesOracle

logger = logging.getLogger(__name__)


class InteractionMode(str, Enum):
    LOCAL = "local"    # hot seat: whoever holds the turn may move
    ONLINE = "online"  # only this client's color, on its own turn
    REPLAY = "replay"  # read-only


@dataclass
class MoveOutcome:
    """Result of applying an incoming wire move."""

    move: Move | None = None
    error: BoardError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BoardSession:
    """
    One interactive board bound to exactly one rules oracle.

    Responsibilities:
    - Filter clicks at the dispatch boundary (mode, turn, ownership)
    - Drive the selection machine and commit chosen moves
    - Reconcile and commit incoming wire moves
    - Build the oriented view for rendering

    An OracleRejection is fatal: the session records it in ``error`` and
    stops accepting input.
    """

    def __init__(
        self,
        oracle: RulesOracle,
        mode: InteractionMode = InteractionMode.LOCAL,
        player_color: Color | None = None,
        orientation: Orientation | None = None,
        layout: BoardLayout | None = None,
    ) -> None:
        if mode == InteractionMode.ONLINE and player_color is None:
            raise ValueError("Online sessions need a player color")

        self.oracle = oracle
        self.mode = mode
        self.player_color = player_color
        if orientation is None:
            orientation = Orientation.for_color(player_color) if player_color is not None else Orientation.PRIMARY
        self.orientation = orientation
        self.layout = layout or BoardLayout.for_height(settings.board_height, settings.board_padding)
        self.selection = SelectionMachine(oracle)
        self.error: str | None = None

    # ------------------------------------------------------------------ #
    #  Oracle queries
    # ------------------------------------------------------------------ #

    def pieces(self) -> list[Piece]:
        return parse_pieces(self.oracle.get_pieces())

    def snapshot(self) -> GameSnapshot:
        return parse_snapshot(self.oracle.get_game_state())

    @property
    def current_turn(self) -> Color:
        return self.snapshot().turn

    @property
    def is_my_turn(self) -> bool:
        if self.mode == InteractionMode.ONLINE:
            return self.current_turn == self.player_color
        return self.mode == InteractionMode.LOCAL

    def can_interact(self) -> bool:
        if self.error is not None or self.mode == InteractionMode.REPLAY:
            return False
        if self.snapshot().is_over:
            return False
        return self.is_my_turn

    def legal_moves(self) -> list[Move]:
        return self.selection.legal_moves()

    # ------------------------------------------------------------------ #
    #  Local input
    # ------------------------------------------------------------------ #

    def click_piece(self, piece: Piece) -> bool:
        """Forward a piece click to the selection machine if it is allowed.

        Returns False when the click was filtered out.
        """
        if not self.can_interact():
            return False
        turn = self.current_turn
        if piece.owner != turn:
            return False
        self.selection.click(piece, turn)
        return True

    def click_piece_key(self, key: str) -> bool:
        piece = find_piece(self.pieces(), key)
        if piece is None:
            logger.debug(f"No piece matches key {key!r}")
            return False
        return self.click_piece(piece)

    def click_destination(self, cell: Cell) -> WireMove | None:
        """Commit the selected piece's legal move onto ``cell``.

        Returns the wire form of the committed move for broadcasting, or None
        if nothing was committed.
        """
        if not self.can_interact() or self.selection.state != SelectionState.SELECTED:
            return None
        move = self.selection.move_to(cell)
        if move is None:
            return None
        try:
            self.selection.commit(move)
        except OracleRejection as e:
            self._fail(e)
            return None
        return WireMove.from_move(move)

    def click_at(self, x: float, y: float) -> WireMove | None:
        """Resolve a screen click against the current frame's click regions."""
        view = self.view()
        marker = marker_at(view, x, y)
        if marker is not None:
            return self.click_destination(marker.move.to_cell)
        piece_view = piece_at(view, x, y)
        if piece_view is not None:
            self.click_piece(piece_view.piece)
        return None

    # ------------------------------------------------------------------ #
    #  Remote input
    # ------------------------------------------------------------------ #

    def receive_wire_move(self, payload: Any) -> MoveOutcome:
        """Reconcile a peer's move and commit it.

        Desynced, stale or corrupted moves, and any move sent to a replay
        board, are dropped without touching the oracle. A rejected commit puts
        the session into its error state.
        """
        if self.error is not None:
            return MoveOutcome(error=OracleRejection(self.error))
        if self.mode == InteractionMode.REPLAY:
            logger.warning("Dropped incoming move: replay boards are read-only")
            return MoveOutcome(error=BoardError("Replay boards do not accept moves"))

        try:
            wire = WireMove.parse(payload)
            move = reconcile(self.oracle, wire)
        except (DecodeError, ReconciliationMismatch) as e:
            logger.warning(f"Dropped incoming move: {e}")
            return MoveOutcome(error=e)

        try:
            commit(self.oracle, move)
        except OracleRejection as e:
            self._fail(e)
            return MoveOutcome(error=e)

        self.selection.reset()
        return MoveOutcome(move=move)

    def sync_turn(self, turn: Color) -> bool:
        """Compare a server turn announcement with the oracle's turn."""
        local = self.current_turn
        if local != turn:
            logger.warning(
                f"Server announced turn {turn.wire_name}, local oracle has {local.wire_name}"
            )
            return False
        return True

    # ------------------------------------------------------------------ #
    #  Position and presentation
    # ------------------------------------------------------------------ #

    def fen(self) -> str:
        return self.oracle.get_fen()

    def load_fen(self, fen: str) -> None:
        self.oracle.set_fen(fen)
        self.selection.reset()

    def set_orientation(self, orientation: Orientation) -> None:
        self.orientation = orientation

    def view(self) -> BoardView:
        interactive = self.can_interact()
        return build_board_view(
            self.layout,
            self.pieces(),
            self.orientation,
            clickable_color=self.current_turn if interactive else None,
            selected_key=self.selection.selected_key,
            legal_moves=self.legal_moves() if interactive else (),
        )

    def _fail(self, error: OracleRejection) -> None:
        logger.error(f"Oracle rejected a move, session disabled: {error.message}", exc_info=error)
        self.error = error.message
        self.selection.reset()
