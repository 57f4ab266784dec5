"""Tests for board construction and containment."""

import pytest

from tessera_board import Board, InvalidBoardKind, InvalidParameter, MalformedDefinition
from tessera_board.catalog import BoardKind
from tessera_board.geometry import Polygon

from conftest import square


def _poly(points) -> Polygon:
    return Polygon.from_points(points)


class TestRectBoard:
    def test_dimensions(self, rect_board: Board) -> None:
        assert rect_board.kind is BoardKind.RECT
        assert rect_board.bounds == pytest.approx((0, 0, 113, 123))
        assert rect_board.width == pytest.approx(113)
        assert rect_board.height == pytest.approx(123)

    def test_contains(self, rect_board: Board) -> None:
        assert rect_board.contains(_poly(square(10, 10)))
        assert rect_board.contains(_poly(square(0, 0)))
        assert not rect_board.contains(_poly(square(-5, 10)))
        assert not rect_board.contains(_poly(square(110, 10)))

    def test_rounded_corners_exclude_the_corner(self) -> None:
        board = Board.from_dict({"type": "rect", "w": 100, "h": 100, "r": 10})
        assert board.corner_radius == pytest.approx(10)
        assert not board.contains(_poly(square(0, 0, 5)))
        assert board.contains(_poly(square(10, 10, 5)))

    def test_display_label(self) -> None:
        assert Board.from_dict({"type": "rect", "w": 113, "h": 123}).display_lines() == ["Board 113×123 mm"]
        rounded = Board.from_dict({"type": "rect", "w": 100, "h": 80, "r": 5})
        assert rounded.display_lines() == ["Board 100×80 mm (R5)"]

    def test_custom_labels(self) -> None:
        board = Board.from_dict({"type": "rect", "w": 10, "h": 10, "label_en": "Tray", "label_zh": "托盘"})
        assert board.display_lines("en") == ["Tray"]
        assert board.display_lines("zh") == ["托盘"]
        lines = Board.from_dict({"type": "rect", "w": 10, "h": 10, "label_lines": ["A", "B"]})
        assert lines.display_lines("zh") == ["A", "B"]

    @pytest.mark.parametrize(
        "data",
        [
            {"type": "rect", "w": 10},
            {"type": "rect", "w": 0, "h": 10},
            {"type": "rect", "w": 10, "h": 10, "r": -1},
            {"type": "rect", "w": 10, "h": 10, "r": 8},
        ],
    )
    def test_invalid_dimensions(self, data) -> None:
        with pytest.raises(InvalidParameter):
            Board.from_dict(data)


class TestQuarterRoundBoard:
    def test_only_cut_corner_is_rounded(self) -> None:
        board = Board.from_dict({"type": "rect_with_quarter_round_cut", "w": 100, "h": 100, "r": 40})
        # Default cut corner is top right
        assert not board.contains(_poly(square(90, 90, 10)))
        assert board.contains(_poly(square(0, 90, 10)))
        assert board.contains(_poly(square(90, 0, 10)))

    def test_other_corner(self) -> None:
        board = Board.from_dict(
            {"type": "rect_with_quarter_round_cut", "w": 100, "h": 100, "r": 40, "cut_corner": "bottomleft"}
        )
        assert not board.contains(_poly(square(0, 0, 10)))
        assert board.contains(_poly(square(90, 90, 10)))

    def test_radius_required(self) -> None:
        with pytest.raises(InvalidParameter):
            Board.from_dict({"type": "rect_with_quarter_round_cut", "w": 100, "h": 100})

    def test_unknown_corner(self) -> None:
        with pytest.raises(InvalidParameter):
            Board.from_dict({"type": "rect_with_quarter_round_cut", "w": 100, "h": 100, "r": 10, "cut_corner": "up"})


class TestPolygonBoard:
    def test_single_ring_from_points(self) -> None:
        board = Board.from_dict({"type": "polygon", "points": [[0, 0], [40, 0], [40, 20], [20, 20], [20, 40], [0, 40]]})
        assert board.contains(_poly(square(0, 0, 20)))
        assert not board.contains(_poly(square(15, 15, 10)))

    def test_piece_must_fit_inside_one_ring(self) -> None:
        board = Board.from_dict({"type": "polygon", "polygons": [square(0, 0, 50), square(60, 0, 50)]})
        assert board.bounds == pytest.approx((0, 0, 110, 50))
        assert board.contains(_poly(square(70, 10)))
        assert not board.contains(_poly(square(45, 10)))

    def test_clockwise_ring_normalized(self) -> None:
        board = Board.from_dict({"type": "polygon", "points": list(reversed(square(0, 0, 50)))})
        assert all(ring.is_ccw for ring in board.rings)

    def test_missing_points(self) -> None:
        with pytest.raises(InvalidParameter):
            Board.from_dict({"type": "polygon"})


class TestBoardKinds:
    def test_unknown_kind(self) -> None:
        with pytest.raises(InvalidBoardKind):
            Board.from_dict({"type": "hexagon", "w": 10, "h": 10})

    def test_not_an_object(self) -> None:
        with pytest.raises(MalformedDefinition):
            Board.from_dict([1, 2])

    def test_to_dict_keeps_definition(self) -> None:
        data = {"type": "rect", "w": 113, "h": 123, "label_en": "Tray"}
        assert Board.from_dict(data).to_dict() == data
