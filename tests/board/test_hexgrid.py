"""Tests for hex geometry and orientation."""

from __future__ import annotations

import math

import pytest

from trihex.board.hexgrid import (
    TILE_PALETTE,
    BoardLayout,
    board_cells,
    board_labels,
    color_of,
    inverse_pixel,
    is_on_board,
    permute,
    pixel_of,
    polygon_of,
    rotate,
)
from trihex.board.models import Cell, Orientation

SQRT3 = math.sqrt(3)
NEIGHBOURS = [(1, 0), (-1, 0), (0, 1), (0, -1), (1, -1), (-1, 1)]


class TestProjection:
    def test_origin(self) -> None:
        x, y = pixel_of(Cell.at(0, 0), 10)
        assert x == pytest.approx(5)
        assert y == pytest.approx(-5 * SQRT3)

    def test_known_cell(self) -> None:
        x, y = pixel_of(Cell.at(2, -3), 4)
        assert x == pytest.approx(4 * 1.5 * 2 + 2)
        assert y == pytest.approx(-4 * (SQRT3 / 2) * 2 + 4 * SQRT3 * 3 - SQRT3 * 2)

    def test_projection_is_affine(self) -> None:
        size = 7.5
        ox, oy = pixel_of(Cell.at(0, 0), size)
        for (q1, r1), (q2, r2) in [((1, 2), (3, -4)), ((-5, 0), (2, 2)), ((0, -4), (-3, 7))]:
            ax, ay = pixel_of(Cell.at(q1, r1), size)
            bx, by = pixel_of(Cell.at(q2, r2), size)
            cx, cy = pixel_of(Cell.at(q1 + q2, r1 + r2), size)
            assert cx - ox == pytest.approx((ax - ox) + (bx - ox))
            assert cy - oy == pytest.approx((ay - oy) + (by - oy))

    def test_projection_ignores_s(self) -> None:
        cell = Cell.at(3, -2)
        assert pixel_of(cell, 12) == pixel_of(Cell(q=3, r=-2, s=-2), 12)

    def test_inverse_pixel_recovers_centres(self) -> None:
        for cell in board_cells():
            x, y = pixel_of(cell, 20)
            q, r = inverse_pixel(x, y, 20)
            assert q == pytest.approx(cell.q)
            assert r == pytest.approx(cell.r)


class TestPolygon:
    def test_six_vertices_on_circumcircle(self) -> None:
        cell = Cell.at(-2, 5)
        cx, cy = pixel_of(cell, 9)
        points = polygon_of(cell, 9)
        assert len(points) == 6
        for x, y in points:
            assert math.hypot(x - cx, y - cy) == pytest.approx(9)

    def test_first_vertex_at_zero_degrees(self) -> None:
        cell = Cell.at(1, 1)
        cx, cy = pixel_of(cell, 9)
        x, y = polygon_of(cell, 9)[0]
        assert x == pytest.approx(cx + 9)
        assert y == pytest.approx(cy)

    def test_is_repeatable(self) -> None:
        cell = Cell.at(4, -4)
        assert polygon_of(cell, 3) == polygon_of(cell, 3)


class TestTileColor:
    def test_uses_palette(self) -> None:
        assert color_of(Cell.at(0, 0)) == TILE_PALETTE[0]
        assert color_of(Cell.at(0, 1)) == TILE_PALETTE[1]
        assert color_of(Cell.at(1, 0)) == TILE_PALETTE[2]

    def test_negative_coordinates_normalised(self) -> None:
        assert color_of(Cell.at(-1, 0)) == TILE_PALETTE[1]
        assert color_of(Cell.at(0, -1)) == TILE_PALETTE[2]

    def test_neighbours_never_share_a_shade(self) -> None:
        for cell in board_cells():
            for dq, dr in NEIGHBOURS:
                other = Cell.at(cell.q + dq, cell.r + dr)
                assert color_of(cell) != color_of(other)


class TestRotation:
    def test_primary_is_identity(self) -> None:
        cell = Cell.at(2, -5)
        assert rotate(cell, Orientation.PRIMARY) == cell

    def test_secondary_and_tertiary_permutations(self) -> None:
        cell = Cell.at(2, -5)  # s = 2
        assert rotate(cell, Orientation.SECONDARY) == Cell(q=2, r=2, s=-5)
        assert rotate(cell, Orientation.TERTIARY) == Cell(q=-5, r=2, s=2)

    def test_raw_permute_skips_the_cell_invariant(self) -> None:
        assert permute(1, 2, 3, Orientation.SECONDARY) == (3, 1, 2)
        assert permute(1, 2, 3, Orientation.TERTIARY) == (2, 3, 1)

    def test_secondary_twice_is_tertiary(self) -> None:
        for cell in board_cells():
            twice = rotate(rotate(cell, Orientation.SECONDARY), Orientation.SECONDARY)
            assert twice == rotate(cell, Orientation.TERTIARY)

    @pytest.mark.parametrize("orientation", [Orientation.SECONDARY, Orientation.TERTIARY])
    def test_three_rotations_return_input(self, orientation: Orientation) -> None:
        for cell in board_cells():
            turned = rotate(rotate(rotate(cell, orientation), orientation), orientation)
            assert turned == cell

    def test_rotation_keeps_the_board(self) -> None:
        cells = set(board_cells())
        for orientation in Orientation:
            assert {rotate(c, orientation) for c in cells} == cells


class TestBoard:
    def test_has_96_cells(self) -> None:
        cells = board_cells()
        assert len(cells) == 96
        assert len({c.key for c in cells}) == 96

    def test_cells_keep_the_invariant(self) -> None:
        for cell in board_cells():
            assert cell.q + cell.r + cell.s == -1

    def test_is_on_board(self) -> None:
        assert is_on_board(0, -4)
        assert is_on_board(-7, 3)
        assert not is_on_board(0, -5)
        assert not is_on_board(8, 0)


class TestLayout:
    def test_size_from_height(self) -> None:
        layout = BoardLayout.for_height(600)
        assert layout.size == pytest.approx(560 / 12 / SQRT3)

    def test_view_box(self) -> None:
        layout = BoardLayout.for_height(640, padding=40)
        size = layout.size
        assert layout.min_x == pytest.approx(-12 * size)
        assert layout.width == pytest.approx(25 * size)
        assert layout.view_box.count(" ") == 3

    def test_height_must_exceed_padding(self) -> None:
        with pytest.raises(ValueError):
            BoardLayout.for_height(40, padding=40)


class TestLabels:
    def test_fifteen_of_each(self) -> None:
        letters, numbers = board_labels(10)
        assert [l.text for l in letters] == list("abcdefghijklmno")
        assert [n.text for n in numbers] == [str(i) for i in range(1, 16)]

    def test_first_letter_position(self) -> None:
        letters, _ = board_labels(10)
        assert letters[0].x == pytest.approx(-100)
        assert letters[0].y == pytest.approx(10 * SQRT3 - 3)

    def test_labels_follow_orientation(self) -> None:
        letters, _ = board_labels(10, Orientation.SECONDARY)
        # (-7, 2, 5) is drawn at (5, -7)
        assert letters[0].x == pytest.approx(80)
