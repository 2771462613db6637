from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError, model_validator

from trihex.board.errors import DecodeError

# --- Enumerations ---
class Color(IntEnum):
    WHITE = 0
    GRAY = 1
    BLACK = 2

    @property
    def wire_name(self) -> str:
        return _COLOR_WIRE_NAMES[self]

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> Color:
        """Resolve a socket color name ("white", "grey"/"gray", "black")."""
        try:
            return _COLOR_BY_NAME[name.strip().lower()]
        except (KeyError, AttributeError):
            raise DecodeError(f"Unknown color name: {name!r}") from None


_COLOR_WIRE_NAMES = {Color.WHITE: "white", Color.GRAY: "grey", Color.BLACK: "black"}
_COLOR_BY_NAME = {
    "white": Color.WHITE,
    "grey": Color.GRAY,
    "gray": Color.GRAY,
    "black": Color.BLACK,
}


class PieceKind(IntEnum):
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveType(IntEnum):
    MOVE = 0
    DOUBLE_PAWN_PUSH = 1
    CAPTURE = 2
    EN_PASSANT = 3
    EN_PASSANT_PROMOTION = 4
    PROMOTION = 5
    CAPTURE_PROMOTION = 6
    CASTLE_KINGSIDE = 7
    CASTLE_QUEENSIDE = 8

    @property
    def is_capture(self) -> bool:
        return self in (MoveType.CAPTURE, MoveType.CAPTURE_PROMOTION)


class Orientation(str, Enum):
    """View rotation for the player sitting at the bottom of the board."""

    PRIMARY = "white"
    SECONDARY = "black"
    TERTIARY = "grey"

    def permute(self, q: int, r: int, s: int) -> tuple[int, int, int]:
        return _PERMUTATIONS[self](q, r, s)

    @classmethod
    def for_color(cls, color: Color) -> Orientation:
        return _ORIENTATION_BY_COLOR[color]


def _identity(q: int, r: int, s: int) -> tuple[int, int, int]:
    return q, r, s


def _rotate_secondary(q: int, r: int, s: int) -> tuple[int, int, int]:
    return s, q, r


def _rotate_tertiary(q: int, r: int, s: int) -> tuple[int, int, int]:
    return r, s, q


_PERMUTATIONS = {
    Orientation.PRIMARY: _identity,
    Orientation.SECONDARY: _rotate_secondary,
    Orientation.TERTIARY: _rotate_tertiary,
}

_ORIENTATION_BY_COLOR = {
    Color.WHITE: Orientation.PRIMARY,
    Color.BLACK: Orientation.SECONDARY,
    Color.GRAY: Orientation.TERTIARY,
}

# --- Coordinates ---
CELL_SUM = -1  # q + r + s for every board cell


class Cell(BaseModel):
    """A board tile. ``s`` is derived from ``q`` and ``r`` when omitted."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    q: int
    r: int
    s: int

    @model_validator(mode="before")
    @classmethod
    def _derive_s(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("s") is None:
            q, r = data.get("q"), data.get("r")
            if isinstance(q, int) and isinstance(r, int):
                data = {**data, "s": CELL_SUM - q - r}
        return data

    @model_validator(mode="after")
    def _check_sum(self) -> Cell:
        if self.q + self.r + self.s != CELL_SUM:
            raise ValueError(
                f"Cell ({self.q}, {self.r}, {self.s}) breaks q + r + s == {CELL_SUM}"
            )
        return self

    @classmethod
    def at(cls, q: int, r: int) -> Cell:
        return cls(q=q, r=r)

    @property
    def key(self) -> tuple[int, int]:
        return self.q, self.r


class Coord(BaseModel):
    """Wire coordinate. Extra fields sent by peers (``i``, ``s``) are ignored."""

    model_config = ConfigDict(frozen=True)

    q: StrictInt
    r: StrictInt


# --- Oracle records ---
class Piece(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    owner: Color
    kind: PieceKind
    cell: Cell


class Move(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True, populate_by_name=True)

    from_cell: Cell = Field(alias="from")
    to_cell: Cell = Field(alias="to")
    move_type: MoveType
    color: Color
    piece: PieceKind


class GameSnapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    turn: Color
    won: Color | None = None
    is_stalemate: bool = False
    move_count: int = 0

    @property
    def is_over(self) -> bool:
        return self.won is not None or self.is_stalemate


# --- Wire format ---
class WireMove(BaseModel):
    """Lossy, serializable projection of a Move."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_cell: Coord = Field(alias="from")
    to_cell: Coord = Field(alias="to")
    move_type: StrictInt = Field(ge=0, le=8)
    color: StrictInt = Field(ge=0, le=2)
    piece: StrictInt = Field(ge=1, le=6)

    @classmethod
    def from_move(cls, move: Move) -> WireMove:
        return cls(
            from_cell=Coord(q=move.from_cell.q, r=move.from_cell.r),
            to_cell=Coord(q=move.to_cell.q, r=move.to_cell.r),
            move_type=int(move.move_type),
            color=int(move.color),
            piece=int(move.piece),
        )

    @classmethod
    def parse(cls, raw: Any) -> WireMove:
        """Validate an untrusted payload (mapping, JSON text or WireMove)."""
        if isinstance(raw, WireMove):
            return raw
        try:
            if isinstance(raw, (str, bytes)):
                return cls.model_validate_json(raw)
            return cls.model_validate(raw)
        except ValidationError as e:
            raise DecodeError(f"Malformed wire move: {e}") from e

    def matches(self, move: Move) -> bool:
        """True when ``move`` agrees on destination, type, color and piece."""
        return (
            move.to_cell.q == self.to_cell.q
            and move.to_cell.r == self.to_cell.r
            and move.move_type == self.move_type
            and move.color == self.color
            and move.piece == self.piece
        )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class MoveRecord(WireMove):
    """A move as archived by the history API."""

    move_number: int = Field(alias="moveNumber")
    timestamp: str
    record_id: str | None = Field(default=None, alias="_id")


# --- Boundary validation ---
_pieces_adapter = TypeAdapter(list[Piece])
_moves_adapter = TypeAdapter(list[Move])


def parse_pieces(raw: Iterable[Any]) -> list[Piece]:
    """Validate oracle piece records, accepting models, mappings or attribute objects."""
    try:
        return _pieces_adapter.validate_python(list(raw), from_attributes=True)
    except ValidationError as e:
        raise DecodeError(f"Oracle returned malformed pieces: {e}") from e


def parse_moves(raw: Iterable[Any]) -> list[Move]:
    """Validate oracle move records, accepting models, mappings or attribute objects."""
    try:
        return _moves_adapter.validate_python(list(raw), from_attributes=True)
    except ValidationError as e:
        raise DecodeError(f"Oracle returned malformed moves: {e}") from e


def parse_snapshot(raw: Any) -> GameSnapshot:
    try:
        return GameSnapshot.model_validate(raw, from_attributes=True)
    except ValidationError as e:
        raise DecodeError(f"Oracle returned malformed game state: {e}") from e
