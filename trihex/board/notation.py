"""Human-readable names for squares and moves."""

from __future__ import annotations

from trihex.board.models import Color, MoveType, Orientation, PieceKind, WireMove

FILES = "abcdefghijklmno"
HISTORY_FILES = FILES.upper()

PIECE_NAMES = {
    PieceKind.PAWN: "Pawn",
    PieceKind.KNIGHT: "Knight",
    PieceKind.BISHOP: "Bishop",
    PieceKind.ROOK: "Rook",
    PieceKind.QUEEN: "Queen",
    PieceKind.KING: "King",
}

MOVE_TYPE_NAMES = {
    MoveType.MOVE: "Move",
    MoveType.DOUBLE_PAWN_PUSH: "DoublePawnPush",
    MoveType.CAPTURE: "Capture",
    MoveType.EN_PASSANT: "EnPassant",
    MoveType.EN_PASSANT_PROMOTION: "EnPassantPromotion",
    MoveType.PROMOTION: "Promotion",
    MoveType.CAPTURE_PROMOTION: "CapturePromotion",
    MoveType.CASTLE_KINGSIDE: "CastleKingSide",
    MoveType.CASTLE_QUEENSIDE: "CastleQueenSide",
}


def square_name(q: int, r: int, orientation: Orientation = Orientation.PRIMARY) -> str:
    """Algebraic-style name (``a1`` .. ``o15``) as seen by ``orientation``.

    Falls back to ``"q,r"`` when the rotated square is off the lettered grid.
    """
    tq, tr, _ = orientation.permute(q, r, -q - r)
    letter_index = tq + 7
    number = -tr + 8
    if 0 <= letter_index < len(FILES) and 1 <= number <= 15:
        return f"{FILES[letter_index]}{number}"
    return f"{tq},{tr}"


def history_label(q: int, r: int) -> str:
    """Square label used in move history listings."""
    index = q + 7
    letter = HISTORY_FILES[index] if 0 <= index < len(HISTORY_FILES) else "?"
    return f"{letter}{r + 8}"


def describe_move(move: WireMove) -> str:
    """E.g. ``"White Pawn DoublePawnPush"``; unknown tags read ``Unknown``."""
    color = _lookup(Color, move.color)
    piece = _lookup(PieceKind, move.piece)
    move_type = _lookup(MoveType, move.move_type)

    color_name = color.display_name if color is not None else "Unknown"
    piece_name = PIECE_NAMES.get(piece, "Unknown")
    move_type_name = MOVE_TYPE_NAMES.get(move_type, "Unknown")
    return f"{color_name} {piece_name} {move_type_name}"


def describe_path(move: WireMove) -> str:
    return (
        f"{history_label(move.from_cell.q, move.from_cell.r)} → "
        f"{history_label(move.to_cell.q, move.to_cell.r)}"
    )


def _lookup(enum_type, value: int):
    try:
        return enum_type(value)
    except ValueError:
        return None
