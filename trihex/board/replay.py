"""Deterministic reconstruction of a position from a move history.

Every navigation step replays from move zero on a fresh oracle. That costs
O(index) reconcile-and-commit operations per call but guarantees that the
displayed position is exactly reproducible from the canonical history. Callers
that navigate long histories often can cache ``ReplayResult`` per index.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from trihex.board.errors import BoardError, DecodeError, ReconciliationMismatch
from trihex.board.models import GameSnapshot, Piece, WireMove, parse_pieces, parse_snapshot
from trihex.board.reconcile import reconcile_and_commit

if TYPE_CHECKING:
    from trihex.board.protocol import OracleFactory

logger = logging.getLogger(__name__)

START_INDEX = -1  # target index of the initial position


@dataclass
class ReplayResult:
    """Position reached by a replay."""

    pieces: list[Piece]
    snapshot: GameSnapshot
    fen: str
    target_index: int
    applied: int = 0
    failed_index: int | None = None
    error: BoardError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reached_index(self) -> int:
        """Index of the last move applied, START_INDEX for the initial position."""
        return self.applied - 1


class ReplayReconstructor:
    def __init__(self, factory: OracleFactory, start_fen: str | None = None) -> None:
        self._factory = factory
        self._start_fen = start_fen

    def reconstruct(self, history: Sequence[WireMove], target_index: int) -> ReplayResult:
        """Replay ``history[0..target_index]`` on a fresh oracle.

        Stops at the first move that fails reconciliation and keeps the last
        good position. ``target_index`` of -1 yields the start position; larger
        indexes are clamped to the end of the history.
        """
        if target_index < START_INDEX:
            raise ValueError(f"target_index must be >= {START_INDEX}, got {target_index}")
        target = min(target_index, len(history) - 1)

        oracle = self._factory.new(self._start_fen) if self._start_fen else self._factory.new_default()

        applied = 0
        failed_index: int | None = None
        error: BoardError | None = None

        for index in range(target + 1):
            try:
                reconcile_and_commit(oracle, WireMove.parse(history[index]))
            except (DecodeError, ReconciliationMismatch) as e:
                logger.warning(f"Replay halted at move {index}: {e}")
                failed_index = index
                error = e
                break
            applied += 1

        return ReplayResult(
            pieces=parse_pieces(oracle.get_pieces()),
            snapshot=parse_snapshot(oracle.get_game_state()),
            fen=oracle.get_fen(),
            target_index=target,
            applied=applied,
            failed_index=failed_index,
            error=error,
        )


@dataclass
class HistoryNavigator:
    """Steps through a history, recomputing the position at each step."""

    reconstructor: ReplayReconstructor
    history: Sequence[WireMove]
    index: int = START_INDEX
    current: ReplayResult | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.go_to(self.index)

    @property
    def last_index(self) -> int:
        return len(self.history) - 1

    def go_to(self, index: int) -> ReplayResult:
        self.index = max(START_INDEX, min(index, self.last_index))
        self.current = self.reconstructor.reconstruct(self.history, self.index)
        return self.current

    def first(self) -> ReplayResult:
        return self.go_to(START_INDEX)

    def last(self) -> ReplayResult:
        return self.go_to(self.last_index)

    def next(self) -> ReplayResult:
        return self.go_to(self.index + 1)

    def previous(self) -> ReplayResult:
        return self.go_to(self.index - 1)
