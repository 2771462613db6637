from __future__ import annotations

from typing import ClassVar, Protocol, runtime_checkable

from trihex.board.models import Cell, GameSnapshot, Move, Piece, PieceKind


@runtime_checkable
class RulesOracle(Protocol):
    """Interface of the external rules engine.

    The oracle is the sole authority on legality, turn order and game end.
    Calls are synchronous in-memory computations. Records may be returned as
    the models below or as mappings/attribute objects of the same shape; the
    board model validates them at its boundary.
    """

    def query_moves(self, cell: Cell) -> list[Move]:
        ...

    def commit_move(
        self,
        move: Move,
        promotion: PieceKind | None = None,
        advance_turn: bool = True,
    ) -> None:
        ...

    def get_pieces(self) -> list[Piece]:
        ...

    def get_game_state(self) -> GameSnapshot:
        ...

    def get_fen(self) -> str:
        ...

    def set_fen(self, fen: str) -> None:
        ...


@runtime_checkable
class OracleFactory(Protocol):
    """Creates fresh oracle instances for one rules variant."""

    variant_id: ClassVar[str]

    def new_default(self) -> RulesOracle:
        ...

    def new(self, fen: str) -> RulesOracle:
        ...
