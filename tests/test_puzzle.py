"""Tests for the puzzle model: colors, grid layout, z-order and picking."""

import pytest

from tessera_board import PALETTE, Board, Puzzle, ShapeCatalog, Transform, assign_colors
from tessera_board.catalog import RectDef
from tessera_board.coloring import group_in_first_seen_order, palette_color


class TestColoring:
    def test_palette(self) -> None:
        assert len(PALETTE) == 8
        assert PALETTE[0].hex == "#e53935"
        assert palette_color(9) == PALETTE[1]

    def test_same_shape_gets_distinct_colors(self) -> None:
        assert assign_colors(["circle_d30", "circle_d30", "square_30"]) == [0, 1, 2]

    def test_groups_concatenate_in_first_seen_order(self) -> None:
        assert assign_colors(["a", "b", "a", "c", "b"]) == [0, 2, 1, 4, 3]

    def test_wraps_after_eight(self) -> None:
        assert assign_colors(["x"] * 10)[8:] == [0, 1]

    def test_group_positions(self) -> None:
        assert group_in_first_seen_order(["b", "a", "b"]) == {"b": [0, 2], "a": [1]}

    def test_palette_color_converts_to_supervision(self) -> None:
        assert PALETTE[0].as_sv_color().as_bgr() == (0x35, 0x39, 0xE5)


class TestPuzzle:
    def test_colors_survive_z_order_changes(self, make_puzzle) -> None:
        puzzle = make_puzzle([("circle_d30", (20, 20)), ("circle_d30", (60, 20)), ("square_30", (60, 80))])
        assert [p.color_index for p in puzzle.pieces] == [0, 1, 2]
        puzzle.bring_to_front(puzzle.pieces[0])
        assert [p.color_index for p in puzzle.pieces] == [0, 1, 2]

    def test_numbering_and_z_order(self, make_puzzle) -> None:
        puzzle = make_puzzle([("square_30", (20, 20)), ("square_30", (60, 20))])
        assert [p.number for p in puzzle.pieces] == [1, 2]
        assert [p.z_order for p in puzzle.pieces] == [0, 1]
        assert puzzle.front_piece() is puzzle.pieces[1]

    def test_bring_to_front(self, make_puzzle) -> None:
        puzzle = make_puzzle([("square_30", (20, 20)), ("square_30", (60, 20)), ("square_30", (20, 60))])
        first = puzzle.pieces[0]
        puzzle.bring_to_front(first)
        assert first.z_order == 3
        assert puzzle.pieces_by_z()[-1] is first
        puzzle.bring_to_front(first)
        assert first.z_order == 3

    def test_topmost_at(self, make_puzzle) -> None:
        puzzle = make_puzzle([("square_30", (30, 30)), ("square_30", (40, 30))])
        assert puzzle.topmost_at((35, 30)) is puzzle.pieces[1]
        puzzle.bring_to_front(puzzle.pieces[0])
        assert puzzle.topmost_at((35, 30)) is puzzle.pieces[0]
        assert puzzle.topmost_at((100, 100)) is None

    def test_polygon_follows_transform(self, make_puzzle) -> None:
        puzzle = make_puzzle([("square_30", (30, 30))])
        piece = puzzle.pieces[0]
        assert piece.polygon.bounds == pytest.approx((15, 15, 45, 45))
        piece.transform = Transform(50, 50)
        assert piece.polygon.bounds == pytest.approx((35, 35, 65, 65))

    def test_outlines_shared_per_shape(self, make_puzzle) -> None:
        puzzle = make_puzzle([("square_30", (20, 20)), ("square_30", (60, 20))])
        assert puzzle.pieces[0].outline is puzzle.pieces[1].outline

    def test_groups(self, make_puzzle) -> None:
        puzzle = make_puzzle([("square_30", (20, 20)), ("circle_d30", (60, 20)), ("square_30", (20, 60))])
        groups = puzzle.groups()
        assert list(groups) == ["square_30", "circle_d30"]
        assert [p.number for p in groups["square_30"]] == [1, 3]

    def test_piece_index_out_of_range(self, make_puzzle) -> None:
        puzzle = make_puzzle([("square_30", (20, 20))])
        with pytest.raises(IndexError):
            puzzle.piece(1)

    def test_notes(self, rect_board: Board) -> None:
        puzzle = Puzzle(rect_board, [], notes={"note_zh": "提示"})
        assert puzzle.note("zh") == "提示"
        assert puzzle.note("en") == "提示"
        assert Puzzle(rect_board, []).note() is None


class TestFromCounts:
    def test_grid_layout(self, catalog: ShapeCatalog, rect_board: Board) -> None:
        puzzle = Puzzle.from_counts(rect_board, [(catalog.get("square_30"), 3)])
        positions = [p.transform.position for p in puzzle.pieces]
        assert positions == [(25.0, 25.0), (60.0, 25.0), (25.0, 60.0)]

    def test_counts_expand_in_order(self, catalog: ShapeCatalog, rect_board: Board) -> None:
        puzzle = Puzzle.from_counts(rect_board, [(catalog.get("circle_d30"), 2), (catalog.get("square_30"), 1)])
        assert [p.shape.id for p in puzzle.pieces] == ["circle_d30", "circle_d30", "square_30"]
        assert [p.color_index for p in puzzle.pieces] == [0, 1, 2]

    def test_layout_starts_at_board_origin(self, catalog: ShapeCatalog) -> None:
        board = Board.from_dict({"type": "polygon", "points": [[100, 100], [300, 100], [300, 300], [100, 300]]})
        puzzle = Puzzle.from_counts(board, [(catalog.get("rect_20x40"), 1)])
        assert puzzle.pieces[0].polygon.bounds == pytest.approx((110, 110, 130, 150))

    def test_initial_transform_recorded(self, catalog: ShapeCatalog, rect_board: Board) -> None:
        puzzle = Puzzle.from_counts(rect_board, [(RectDef("r", 10, 10), 1)])
        piece = puzzle.pieces[0]
        assert piece.initial_transform == piece.transform
