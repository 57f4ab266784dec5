"""
Board Module
============

Bounded Context: The fixed region pieces must fit inside.

Board kinds:
- rect:                         w, h, optional r (all corners rounded)
- rect_with_quarter_round_cut:  w, h, r, cut_corner (one rounded corner)
- polygon:                      polygons: [[[x, y] | [x, y, r], ...], ...]
                                (or a single "points" ring)

Design:
- Immutable after load (frozen dataclass, read-only rings)
- Board space: origin at the lower-left for rect kinds, y up
- A piece is inside the board if it is inside ANY ring
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from tessera_board.errors import InvalidBoardKind, InvalidParameter, MalformedDefinition
from tessera_board.geometry import Polygon, polygon_contains_polygon

from .labels import fmt_mm
from .rounding import CornerPoint, round_corners


class BoardKind(str, Enum):
    RECT = "rect"
    QUARTER_ROUND_CUT = "rect_with_quarter_round_cut"
    POLYGON = "polygon"


class CutCorner(str, Enum):
    TOP_RIGHT = "topright"
    TOP_LEFT = "topleft"
    BOTTOM_LEFT = "bottomleft"
    BOTTOM_RIGHT = "bottomright"


@dataclass(frozen=True, eq=False)
class Board:
    """
    Puzzle board.

    Attributes:
        kind: Board kind
        rings: One or more counter-clockwise rings in board space
        definition: Source definition (kept for round-tripping)
        corner_radius: Largest rounding radius (0 for sharp corners)
        label / label_en / label_zh: Optional display labels
        label_lines: Explicit label lines (override every other label)
    """

    kind: BoardKind
    rings: Tuple[Polygon, ...]
    definition: Dict[str, Any] = field(default_factory=dict)
    corner_radius: float = 0.0
    label: Optional[str] = None
    label_en: Optional[str] = None
    label_zh: Optional[str] = None
    label_lines: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.rings:
            raise InvalidParameter("polygons", "board needs at least one ring", "board")
        object.__setattr__(self, "rings", tuple(r.as_ccw() for r in self.rings))

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        boxes = [ring.bounds for ring in self.rings]
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )

    @property
    def width(self) -> float:
        min_x, _, max_x, _ = self.bounds
        return max_x - min_x

    @property
    def height(self) -> float:
        _, min_y, _, max_y = self.bounds
        return max_y - min_y

    def contains(self, polygon: Polygon) -> bool:
        """True if the polygon lies within one of the board rings."""
        return any(polygon_contains_polygon(ring, polygon) for ring in self.rings)

    def display_lines(self, language: str = "en") -> List[str]:
        """Label lines for the blueprint's board row."""
        if self.label_lines:
            return list(self.label_lines)
        custom = (self.label_zh if language == "zh" else self.label_en) or self.label
        if custom:
            return [custom]
        size = f"Board {fmt_mm(self.width)}×{fmt_mm(self.height)} mm"
        if self.corner_radius > 0:
            size += f" (R{fmt_mm(self.corner_radius)})"
        return [size]

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.definition)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Board":
        """
        Build a board from its puzzle-file definition.

        Raises:
            MalformedDefinition: Not an object
            InvalidBoardKind: Unknown "type"
            InvalidParameter: Missing or invalid dimensions
        """
        if not isinstance(data, Mapping):
            raise MalformedDefinition(f"board must be an object, got {type(data).__name__}")

        raw_kind = data.get("type", data.get("kind"))
        try:
            kind = BoardKind(raw_kind)
        except ValueError:
            raise InvalidBoardKind(raw_kind) from None

        if kind is BoardKind.POLYGON:
            rings, radius = _polygon_rings(data)
        else:
            rings, radius = _rect_ring(kind, data)

        label_lines = data.get("label_lines") or ()
        if not isinstance(label_lines, (list, tuple)):
            raise MalformedDefinition("board.label_lines must be a list of strings")

        return cls(
            kind=kind,
            rings=tuple(rings),
            definition=dict(data),
            corner_radius=radius,
            label=data.get("label"),
            label_en=data.get("label_en"),
            label_zh=data.get("label_zh"),
            label_lines=tuple(str(line) for line in label_lines),
        )


def _dimension(data: Mapping[str, Any], key: str, positive: bool = True) -> float:
    if key not in data:
        raise InvalidParameter(key, "missing", "board")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(key, f"expected a number, got {value!r}", "board")
    if positive and value <= 0:
        raise InvalidParameter(key, f"must be > 0, got {value}", "board")
    if value < 0:
        raise InvalidParameter(key, f"must be >= 0, got {value}", "board")
    return float(value)


def _rect_ring(kind: BoardKind, data: Mapping[str, Any]) -> Tuple[List[Polygon], float]:
    w = _dimension(data, "w")
    h = _dimension(data, "h")

    if kind is BoardKind.QUARTER_ROUND_CUT:
        r = _dimension(data, "r")
        raw_corner = data.get("cut_corner", CutCorner.TOP_RIGHT.value)
        try:
            corner = CutCorner(raw_corner)
        except ValueError:
            raise InvalidParameter("cut_corner", f"unknown corner {raw_corner!r}", "board") from None
        radii = {c: 0.0 for c in CutCorner}
        radii[corner] = r
    else:
        r = _dimension(data, "r", positive=False) if "r" in data else 0.0
        radii = {c: r for c in CutCorner}

    corners = [
        CornerPoint(0.0, 0.0, radii[CutCorner.BOTTOM_LEFT]),
        CornerPoint(w, 0.0, radii[CutCorner.BOTTOM_RIGHT]),
        CornerPoint(w, h, radii[CutCorner.TOP_RIGHT]),
        CornerPoint(0.0, h, radii[CutCorner.TOP_LEFT]),
    ]
    return [Polygon(round_corners(corners, "board"))], r


def _polygon_rings(data: Mapping[str, Any]) -> Tuple[List[Polygon], float]:
    if "polygons" in data:
        raw_rings = data["polygons"]
    elif "points" in data:
        raw_rings = [data["points"]]
    else:
        raise InvalidParameter("polygons", "missing (give polygons or points)", "board")

    if not isinstance(raw_rings, (list, tuple)) or not raw_rings:
        raise InvalidParameter("polygons", "expected a non-empty list of rings", "board")

    rings = []
    radius = 0.0
    for raw in raw_rings:
        if not isinstance(raw, (list, tuple)) or len(raw) < 3:
            raise InvalidParameter("polygons", "each ring needs at least 3 points", "board")
        corners = []
        for entry in raw:
            if (
                not isinstance(entry, (list, tuple))
                or len(entry) not in (2, 3)
                or any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in entry)
            ):
                raise InvalidParameter("polygons", f"bad point {entry!r}", "board")
            corners.append(CornerPoint(*(float(v) for v in entry)))

        declared = Polygon.from_points([(c.x, c.y) for c in corners])
        if declared.area <= 1e-9:
            raise InvalidParameter("polygons", "ring has zero area", "board")
        if declared.signed_area < 0:
            corners.reverse()

        radius = max([radius] + [c.r for c in corners])
        rings.append(Polygon(round_corners(corners, "board")))
    return rings, radius
