"""Canonical string identity for a piece at a position.

Format is ``owner|kind|q|r`` with plain decimal integer fields. Selection
equality depends on it, so the field order, delimiter and digits are fixed.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from trihex.board.errors import DecodeError
from trihex.board.models import Piece

DELIMITER = "|"
FIELD_COUNT = 4
_FIELD_RE = re.compile(r"0|-?[1-9][0-9]*")


class DecodedKey(NamedTuple):
    owner: int
    kind: int
    q: int
    r: int


def encode(owner: int, kind: int, q: int, r: int) -> str:
    return DELIMITER.join(str(int(field)) for field in (owner, kind, q, r))


def key_of(piece: Piece) -> str:
    return encode(piece.owner, piece.kind, piece.cell.q, piece.cell.r)


def decode(key: str) -> DecodedKey:
    """Split a key back into its fields. Raises DecodeError if malformed."""
    parts = key.split(DELIMITER)
    if len(parts) != FIELD_COUNT:
        raise DecodeError(f"Piece key {key!r} has {len(parts)} fields, expected {FIELD_COUNT}")
    if not all(_FIELD_RE.fullmatch(part) for part in parts):
        raise DecodeError(f"Piece key {key!r} has a non-integer field")
    return DecodedKey(*(int(part) for part in parts))


def find_piece(pieces: list[Piece], key: str) -> Piece | None:
    """Locate the piece matching ``key``; malformed keys match nothing."""
    try:
        wanted = decode(key)
    except DecodeError:
        return None
    for piece in pieces:
        if (piece.owner, piece.kind, piece.cell.q, piece.cell.r) == wanted:
            return piece
    return None
