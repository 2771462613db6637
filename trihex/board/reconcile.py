"""Recover authoritative oracle moves from lossy wire moves.

A wire move only carries coordinates and tags, so it is never committed as-is:
the oracle is asked for the legal moves of the piece on the origin cell and the
single move agreeing with the wire fields is used instead. A client therefore
never applies a move its own oracle has not certified for the current position.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from trihex.board.errors import NotFound, OracleRejection, ReconciliationMismatch
from trihex.board.models import Move, PieceKind, WireMove, parse_moves, parse_pieces

if TYPE_CHECKING:
    from trihex.board.protocol import RulesOracle

logger = logging.getLogger(__name__)


def reconcile(oracle: RulesOracle, wire: WireMove) -> Move:
    """Return the legal oracle move described by ``wire``.

    Raises:
        NotFound: no piece stands on ``wire.from_cell``.
        ReconciliationMismatch: the piece has no legal move matching ``wire``.
    """
    origin = (wire.from_cell.q, wire.from_cell.r)
    pieces = parse_pieces(oracle.get_pieces())

    piece = next((p for p in pieces if p.cell.key == origin), None)
    if piece is None:
        raise NotFound(f"No piece at ({origin[0]}, {origin[1]})", wire)

    legal = parse_moves(oracle.query_moves(piece.cell))
    for move in legal:
        if wire.matches(move):
            return move

    logger.debug(
        f"No legal move matches {wire.to_payload()}; candidates: "
        f"{[WireMove.from_move(m).to_payload() for m in legal]}"
    )
    raise ReconciliationMismatch(
        f"Move from ({origin[0]}, {origin[1]}) to "
        f"({wire.to_cell.q}, {wire.to_cell.r}) is not legal in the current position",
        wire,
    )


def commit(
    oracle: RulesOracle,
    move: Move,
    promotion: PieceKind | None = None,
    advance_turn: bool = True,
) -> None:
    """Commit ``move`` to the oracle, surfacing any failure as OracleRejection."""
    try:
        oracle.commit_move(move, promotion, advance_turn)
    except Exception as e:
        raise OracleRejection(f"Oracle rejected move: {e}", original=e) from e


def reconcile_and_commit(
    oracle: RulesOracle,
    wire: WireMove,
    promotion: PieceKind | None = None,
) -> Move:
    """Reconcile ``wire`` and commit the result as one unit of work."""
    move = reconcile(oracle, wire)
    commit(oracle, move, promotion)
    return move
