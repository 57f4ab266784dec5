"""Shared fixtures for the tessera test suite."""

from typing import Callable, Sequence, Tuple

import pytest

from tessera_board import Board, Puzzle, ShapeCatalog, Transform
from tessera_io import default_catalog


@pytest.fixture(scope="session")
def catalog() -> ShapeCatalog:
    """Bundled shape catalog."""
    return default_catalog()


@pytest.fixture
def rect_board() -> Board:
    """113 x 123 mm rectangular board with sharp corners."""
    return Board.from_dict({"type": "rect", "w": 113, "h": 123})


@pytest.fixture
def make_puzzle(catalog: ShapeCatalog, rect_board: Board) -> Callable[..., Puzzle]:
    """Build a puzzle from (shape id, (x, y)) pairs on the rect board."""

    def _make(placements: Sequence[Tuple[str, Tuple[float, float]]], board: Board = None) -> Puzzle:
        return Puzzle(
            board or rect_board,
            [(catalog.get(shape_id), Transform(x, y)) for shape_id, (x, y) in placements],
        )

    return _make


def square(x: float, y: float, size: float = 10.0) -> list:
    """Axis-aligned CCW square with its lower-left corner at (x, y)."""
    return [(x, y), (x + size, y), (x + size, y + size), (x, y + size)]
