"""
Puzzle Model
============

Bounded Context: The board plus the pieces placed on it.

Design:
- Piece keeps its resolved outline; world polygons are derived from the
  current transform (cached per transform value)
- Piece.transform is mutated only by the constraint engine
- Pieces keep load order (stable numbering for messages and coloring);
  draw order is the separate z_order field
- Colors assigned once in the Puzzle constructor
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from tessera_board.catalog import Board, Outline, ShapeDef, resolve
from tessera_board.coloring import assign_colors, group_in_first_seen_order
from tessera_board.geometry import PointLocation, Polygon, point_in_polygon
from tessera_board.transform import Transform, apply_transform

# Default grid placement for pieces expanded from counts
LAYOUT_MARGIN_MM = 10.0
LAYOUT_GAP_MM = 5.0


@dataclass(eq=False)
class Piece:
    """
    A shape instance on the board.

    Attributes:
        index: Load order (0-based; messages show index + 1)
        shape: Shape definition
        outline: Local-frame outline resolved from shape
        transform: Current placement
        initial_transform: Placement at load time (restored by reset)
        z_order: Draw order, higher is in front
        color_index: Palette index (fixed at load)
    """

    index: int
    shape: ShapeDef
    outline: Outline
    transform: Transform
    initial_transform: Transform
    z_order: int = 0
    color_index: int = 0
    _cache: Optional[Tuple[Transform, Polygon]] = field(default=None, repr=False)

    @property
    def number(self) -> int:
        """1-based number used in user-facing messages."""
        return self.index + 1

    @property
    def group_key(self) -> str:
        return self.shape.group_key

    def polygon_for(self, transform: Transform) -> Polygon:
        """World polygon for an arbitrary (e.g. proposed) transform."""
        if self._cache is not None and self._cache[0] == transform:
            return self._cache[1]
        return apply_transform(self.outline, transform)

    @property
    def polygon(self) -> Polygon:
        """World polygon for the current transform."""
        if self._cache is None or self._cache[0] != self.transform:
            self._cache = (self.transform, apply_transform(self.outline, self.transform))
        return self._cache[1]


class Puzzle:
    """
    Board, pieces and notes of one loaded puzzle.

    Example:
        puzzle = Puzzle.from_counts(board, [(catalog.get("circle_d30"), 2)])
        front = puzzle.topmost_at((25.0, 25.0))
    """

    def __init__(
        self,
        board: Board,
        placements: Sequence[Tuple[ShapeDef, Transform]],
        notes: Optional[Dict[str, str]] = None,
        shapes_file: Optional[str] = None,
        units: str = "mm",
    ):
        self.board = board
        self.notes: Dict[str, str] = dict(notes or {})
        self.shapes_file = shapes_file
        self.units = units

        outlines: Dict[ShapeDef, Outline] = {}
        self.pieces: List[Piece] = []
        for index, (shape, transform) in enumerate(placements):
            if shape not in outlines:
                outlines[shape] = resolve(shape)
            self.pieces.append(
                Piece(
                    index=index,
                    shape=shape,
                    outline=outlines[shape],
                    transform=transform,
                    initial_transform=transform,
                    z_order=index,
                )
            )

        for piece, color in zip(self.pieces, assign_colors([p.group_key for p in self.pieces])):
            piece.color_index = color

    @classmethod
    def from_counts(
        cls,
        board: Board,
        counts: Sequence[Tuple[ShapeDef, int]],
        notes: Optional[Dict[str, str]] = None,
        shapes_file: Optional[str] = None,
    ) -> "Puzzle":
        """
        Expand shape counts into pieces laid out on a grid.

        Rows start at the board's lower-left plus a 10 mm margin, pieces are
        5 mm apart, and a new row starts when the next piece would pass the
        board's right edge minus the margin.
        """
        min_x, min_y, max_x, _ = board.bounds
        x = min_x + LAYOUT_MARGIN_MM
        y = min_y + LAYOUT_MARGIN_MM
        right = max_x - LAYOUT_MARGIN_MM
        row_height = 0.0

        placements = []
        for shape, count in counts:
            outline = resolve(shape)
            ox0, oy0, ox1, oy1 = outline.bounds
            w, h = ox1 - ox0, oy1 - oy0
            for _ in range(count):
                if x + w > right and x > min_x + LAYOUT_MARGIN_MM:
                    x = min_x + LAYOUT_MARGIN_MM
                    y += row_height + LAYOUT_GAP_MM
                    row_height = 0.0
                # Outline's bounding box lower-left lands on the cursor
                placements.append((shape, Transform(x - ox0, y - oy0)))
                x += w + LAYOUT_GAP_MM
                row_height = max(row_height, h)

        return cls(board, placements, notes=notes, shapes_file=shapes_file)

    def __len__(self) -> int:
        return len(self.pieces)

    def piece(self, index: int) -> Piece:
        if not 0 <= index < len(self.pieces):
            raise IndexError(f"No piece {index} (puzzle has {len(self.pieces)})")
        return self.pieces[index]

    def others(self, piece: Piece) -> List[Piece]:
        return [p for p in self.pieces if p is not piece]

    def pieces_by_z(self) -> List[Piece]:
        """Back-to-front draw order."""
        return sorted(self.pieces, key=lambda p: p.z_order)

    def topmost_at(self, point: Sequence[float]) -> Optional[Piece]:
        """Front-most piece whose polygon contains the point (boundary included)."""
        for piece in reversed(self.pieces_by_z()):
            if point_in_polygon(point, piece.polygon) is not PointLocation.OUTSIDE:
                return piece
        return None

    def front_piece(self) -> Optional[Piece]:
        if not self.pieces:
            return None
        return max(self.pieces, key=lambda p: p.z_order)

    def bring_to_front(self, piece: Piece) -> None:
        """Raise z_order above every other piece. Colors are untouched."""
        top = max(p.z_order for p in self.pieces)
        if piece.z_order != top or sum(p.z_order == top for p in self.pieces) > 1:
            piece.z_order = top + 1

    def groups(self) -> "OrderedDict[str, List[Piece]]":
        """Pieces grouped by shape, groups in first-seen load order."""
        grouped = group_in_first_seen_order([p.group_key for p in self.pieces])
        return OrderedDict(
            (key, [self.pieces[i] for i in positions]) for key, positions in grouped.items()
        )

    def note(self, language: str = "en") -> Optional[str]:
        """Note for the language, falling back to the other language."""
        preferred = self.notes.get(f"note_{language}")
        if preferred:
            return preferred
        for value in self.notes.values():
            if value:
                return value
        return None
