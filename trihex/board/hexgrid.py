"""Hex geometry for the three-player board.

Cells use cube-style coordinates with ``q + r + s == -1``. Projection ignores
``s``; tiles are flat-topped with circumradius ``size``. The board is the union
of two rhombic sweeps and holds 96 cells (32 per player).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from trihex.board.models import Cell, Orientation

SQRT3 = math.sqrt(3)

TILE_PALETTE: tuple[str, str, str] = ("#E0E0E0", "#A0A0A0", "#606060")

Point = tuple[float, float]

# Edge cells that carry the file letters and rank numbers, in label order.
FILE_LETTERS = "abcdefghijklmno"
FILE_LABEL_CELLS: list[tuple[int, int]] = [
    (-7, 2), (-6, 1), (-5, 0), (-4, -5), (-3, -5),
    (-2, -5), (-1, -5), (0, -5), (1, -6), (2, -7),
    (3, -8), (4, -5), (5, -5), (6, -5), (7, -5),
]
RANK_LABEL_CELLS: list[tuple[int, int]] = [
    (4, -7), (4, -6), (4, -5), (8, -4), (7, -3),
    (6, -2), (5, -1), (4, 0), (4, 1), (4, 2),
    (4, 3), (0, 4), (-1, 5), (-2, 6), (-3, 7),
]


def pixel_of(cell: Cell, size: float) -> Point:
    """Project a cell to the centre of its tile in screen space."""
    x = size * 1.5 * cell.q + size / 2
    y = -size * (SQRT3 / 2) * cell.q - size * SQRT3 * cell.r - (SQRT3 * size / 2)
    return x, y


def polygon_of(cell: Cell, size: float) -> list[Point]:
    """Return the 6 vertices of the tile, vertex i at i * 60 degrees."""
    cx, cy = pixel_of(cell, size)
    points: list[Point] = []
    for i in range(6):
        angle = i * math.pi / 3
        points.append((cx + size * math.cos(angle), cy + size * math.sin(angle)))
    return points


def color_of(cell: Cell) -> str:
    """Tile shade; neighbouring tiles always get different shades."""
    index = ((2 * cell.q + cell.r) % 3 + 3) % 3
    return TILE_PALETTE[index]


def permute(q: int, r: int, s: int, orientation: Orientation) -> tuple[int, int, int]:
    return orientation.permute(q, r, s)


def rotate(cell: Cell, orientation: Orientation) -> Cell:
    """Rotate a cell into the given viewer's frame.

    SECONDARY and TERTIARY are inverse 120 degree turns, so applying either
    three times is the identity and SECONDARY twice equals TERTIARY.
    """
    q, r, s = orientation.permute(cell.q, cell.r, cell.s)
    return Cell(q=q, r=r, s=s)


def inverse_pixel(x: float, y: float, size: float) -> tuple[float, float]:
    """Approximate fractional (q, r) for a screen point.

    Not exact near tile boundaries; interactive hit-testing goes through the
    per-piece click regions in ``trihex.board.view`` instead.
    """
    q = ((2 / 3) * (x - size / 2)) / size
    r = ((-1 / 3) * (x - size / 2) - (SQRT3 / 3) * (y + SQRT3 * size / 2)) / size
    return q, r


def board_cells() -> list[Cell]:
    """All cells of the board, ordered by (q, r)."""
    keys: set[tuple[int, int]] = set()
    for q in range(-4, 8):
        for r in range(-4, 4 - q):
            keys.add((q, r))
    for q in range(-7, 4):
        for r in range(-4 - q, 4):
            keys.add((q, r))
    return [Cell.at(q, r) for q, r in sorted(keys)]


def is_on_board(q: int, r: int) -> bool:
    return (q, r) in _BOARD_KEYS


_BOARD_KEYS = frozenset(c.key for c in board_cells())


@dataclass(frozen=True)
class BoardLayout:
    """Tile size and SVG view box for a board drawn at a given pixel height."""

    size: float
    min_x: float
    min_y: float
    width: float
    height: float

    @classmethod
    def for_height(cls, height: float, padding: float = 40) -> BoardLayout:
        if height <= padding:
            raise ValueError(f"Board height {height} must exceed padding {padding}")
        size = (height - padding) / 12 / SQRT3

        left = pixel_of(Cell.at(-7, 3), size)[0] - size
        right = pixel_of(Cell.at(7, -4), size)[0] + size
        top = pixel_of(Cell.at(-4, 7), size)[1] - size
        bottom = pixel_of(Cell.at(-4, -4), size)[1] + size

        return cls(
            size=size,
            min_x=left - size,
            min_y=top - size,
            width=right - left + size * 2,
            height=bottom - top + size * 2,
        )

    @property
    def view_box(self) -> str:
        return f"{self.min_x} {self.min_y} {self.width} {self.height}"


@dataclass(frozen=True)
class Label:
    text: str
    x: float
    y: float


def _label_anchor(q: int, r: int, size: float, orientation: Orientation) -> Point:
    # Label cells sit outside the board, so they are permuted without the cell
    # invariant, using s = -q - r.
    tq, tr, ts = orientation.permute(q, r, -q - r)
    x = size * 1.5 * tq + size / 2
    y = -size * (SQRT3 / 2) * tq - size * SQRT3 * tr - (SQRT3 * size / 2)
    return x, y


def board_labels(size: float, orientation: Orientation = Orientation.PRIMARY) -> tuple[list[Label], list[Label]]:
    """File letters and rank numbers placed around the board edge."""
    letters = []
    for text, (q, r) in zip(FILE_LETTERS, FILE_LABEL_CELLS):
        x, y = _label_anchor(q, r, size, orientation)
        letters.append(Label(text=text, x=x, y=y - size * 0.3))

    numbers = []
    for index, (q, r) in enumerate(RANK_LABEL_CELLS):
        x, y = _label_anchor(q, r, size, orientation)
        numbers.append(Label(text=str(index + 1), x=x - size * 0.2, y=y + size * 0.3))

    return letters, numbers
