"""Renderable board views.

Tiles are drawn in board coordinates; pieces and move markers are rotated into
the viewer's orientation before projection. Clicks are resolved against the
circular click region around each piece or marker, never by inverting pixels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from trihex.board.hexgrid import BoardLayout, Label, Point, board_cells, board_labels, color_of, pixel_of, polygon_of, rotate
from trihex.board.models import Cell, Color, Move, Orientation, Piece
from trihex.board.piece_key import key_of
from trihex.config import settings

CAPTURE_RING_RATIO = 0.5
MOVE_DOT_RATIO = 0.15


@dataclass(frozen=True)
class TileView:
    cell: Cell
    center: Point
    points: list[Point]
    fill: str


@dataclass(frozen=True)
class PieceView:
    key: str
    piece: Piece
    x: float
    y: float
    click_radius: float
    clickable: bool = False
    selected: bool = False


@dataclass(frozen=True)
class MoveMarker:
    move: Move
    x: float
    y: float
    click_radius: float
    visual_radius: float
    is_capture: bool


@dataclass
class BoardView:
    layout: BoardLayout
    orientation: Orientation
    tiles: list[TileView] = field(default_factory=list)
    pieces: list[PieceView] = field(default_factory=list)
    markers: list[MoveMarker] = field(default_factory=list)
    file_labels: list[Label] = field(default_factory=list)
    rank_labels: list[Label] = field(default_factory=list)


def project(cell: Cell, size: float, orientation: Orientation) -> Point:
    return pixel_of(rotate(cell, orientation), size)


def build_board_view(
    layout: BoardLayout,
    pieces: Iterable[Piece],
    orientation: Orientation = Orientation.PRIMARY,
    *,
    clickable_color: Color | None = None,
    selected_key: str | None = None,
    legal_moves: Iterable[Move] = (),
    with_labels: bool = True,
) -> BoardView:
    """Assemble the tiles, pieces, move markers and labels for one frame.

    ``clickable_color`` marks the pieces the viewer may select; pass None when
    interaction is disabled.
    """
    size = layout.size
    click_radius = size * settings.click_radius_ratio
    view = BoardView(layout=layout, orientation=orientation)

    for cell in board_cells():
        view.tiles.append(TileView(
            cell=cell,
            center=pixel_of(cell, size),
            points=polygon_of(cell, size),
            fill=color_of(cell),
        ))

    for piece in pieces:
        key = key_of(piece)
        x, y = project(piece.cell, size, orientation)
        view.pieces.append(PieceView(
            key=key,
            piece=piece,
            x=x,
            y=y,
            click_radius=click_radius,
            clickable=clickable_color is not None and piece.owner == clickable_color,
            selected=key == selected_key,
        ))

    for move in legal_moves:
        x, y = project(move.to_cell, size, orientation)
        is_capture = move.move_type.is_capture
        view.markers.append(MoveMarker(
            move=move,
            x=x,
            y=y,
            click_radius=click_radius,
            visual_radius=size * (CAPTURE_RING_RATIO if is_capture else MOVE_DOT_RATIO),
            is_capture=is_capture,
        ))

    if with_labels:
        view.file_labels, view.rank_labels = board_labels(size, orientation)

    return view


def piece_at(view: BoardView, x: float, y: float) -> PieceView | None:
    """The clickable piece whose click region contains (x, y), if any."""
    for piece_view in view.pieces:
        if piece_view.clickable and _within(x, y, piece_view.x, piece_view.y, piece_view.click_radius):
            return piece_view
    return None


def marker_at(view: BoardView, x: float, y: float) -> MoveMarker | None:
    for marker in view.markers:
        if _within(x, y, marker.x, marker.y, marker.click_radius):
            return marker
    return None


def _within(x: float, y: float, cx: float, cy: float, radius: float) -> bool:
    return math.hypot(x - cx, y - cy) <= radius
