"""
Shape Catalog Module
====================

Bounded Context: Parametric shape definitions and their resolution into
local-frame outlines.

Design:
- Closed set of frozen dataclass variants, one per shape kind
- Parameters validated at construction (InvalidParameter)
- One resolver per variant, dispatched by type in resolve()
- Outlines are counter-clockwise and anchored at the local origin:
    * area centroid for rect, triangles, regular polygon, circle
    * vertex average of the declared corners for trapezoid,
      parallelogram and free-form polygon

All lengths are millimeters.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Tuple

import numpy as np

from tessera_board.errors import InvalidParameter, InvalidShapeKind, MalformedDefinition
from tessera_board.geometry import Polygon

from .rounding import CornerPoint, round_corners

# Circles are approximated by a regular polygon with this many vertices
CIRCLE_SEGMENTS = 48

Outline = Polygon


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    RECT = "rect"
    REGULAR_POLYGON = "regular_polygon"
    RIGHT_TRIANGLE = "right_triangle"
    ISOSCELES_TRAPEZOID = "isosceles_trapezoid"
    PARALLELOGRAM = "parallelogram"
    EQUILATERAL_TRIANGLE = "equilateral_triangle"
    POLYGON = "polygon"


def _owner(shape: "ShapeDef") -> str:
    return shape.id or shape.kind.value


def _check_number(shape: "ShapeDef", name: str, value: Any, positive: bool = True) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(name, f"expected a number, got {value!r}", _owner(shape))
    if not math.isfinite(value):
        raise InvalidParameter(name, f"must be finite, got {value}", _owner(shape))
    if positive and value <= 0:
        raise InvalidParameter(name, f"must be > 0, got {value}", _owner(shape))


def _fmt(value: float):
    """Integral floats serialize as ints (30 rather than 30.0)."""
    return int(value) if float(value).is_integer() else value


@dataclass(frozen=True)
class ShapeDef:
    """
    Base of all shape variants.

    Attributes:
        id: Catalog identifier (None for inline puzzle shapes)
        label_en / label_zh / label: Optional display labels
    """

    id: Optional[str]
    label_en: Optional[str] = field(default=None, kw_only=True)
    label_zh: Optional[str] = field(default=None, kw_only=True)
    label: Optional[str] = field(default=None, kw_only=True)

    kind: ClassVar[ShapeKind]

    def params(self) -> Dict[str, Any]:
        """Kind-specific parameters as they appear in catalog files."""
        raise NotImplementedError

    @property
    def group_key(self) -> str:
        """Grouping key for coloring and blueprint rows."""
        if self.id:
            return self.id
        signature = ",".join(f"{k}={v}" for k, v in sorted(self.params().items()))
        return f"{self.kind.value}({signature})"

    def catalog_label(self, language: str = "en") -> Optional[str]:
        if language == "zh":
            return self.label_zh or self.label
        return self.label_en or self.label

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        data["type"] = self.kind.value
        data.update(self.params())
        for key in ("label_en", "label_zh", "label"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class CircleDef(ShapeDef):
    diameter: float
    kind: ClassVar[ShapeKind] = ShapeKind.CIRCLE

    def __post_init__(self):
        _check_number(self, "d", self.diameter)

    def params(self):
        return {"d": _fmt(self.diameter)}


@dataclass(frozen=True)
class RectDef(ShapeDef):
    w: float
    h: float
    kind: ClassVar[ShapeKind] = ShapeKind.RECT

    def __post_init__(self):
        _check_number(self, "w", self.w)
        _check_number(self, "h", self.h)

    @property
    def is_square(self) -> bool:
        return abs(self.w - self.h) < 1e-9

    def params(self):
        return {"w": _fmt(self.w), "h": _fmt(self.h)}


@dataclass(frozen=True)
class RegularPolygonDef(ShapeDef):
    n: int
    side: float
    kind: ClassVar[ShapeKind] = ShapeKind.REGULAR_POLYGON

    def __post_init__(self):
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n < 3:
            raise InvalidParameter("n", f"must be an integer >= 3, got {self.n!r}", _owner(self))
        _check_number(self, "side", self.side)

    @property
    def circumradius(self) -> float:
        return self.side / (2.0 * math.sin(math.pi / self.n))

    def params(self):
        return {"n": self.n, "side": _fmt(self.side)}


@dataclass(frozen=True)
class RightTriangleDef(ShapeDef):
    a: float
    b: float
    kind: ClassVar[ShapeKind] = ShapeKind.RIGHT_TRIANGLE

    def __post_init__(self):
        _check_number(self, "a", self.a)
        _check_number(self, "b", self.b)

    def params(self):
        return {"a": _fmt(self.a), "b": _fmt(self.b)}


@dataclass(frozen=True)
class IsoscelesTrapezoidDef(ShapeDef):
    base_bottom: float
    base_top: float
    height: float
    kind: ClassVar[ShapeKind] = ShapeKind.ISOSCELES_TRAPEZOID

    def __post_init__(self):
        _check_number(self, "base_bottom", self.base_bottom)
        _check_number(self, "base_top", self.base_top)
        _check_number(self, "height", self.height)

    def params(self):
        return {
            "base_bottom": _fmt(self.base_bottom),
            "base_top": _fmt(self.base_top),
            "height": _fmt(self.height),
        }


@dataclass(frozen=True)
class ParallelogramDef(ShapeDef):
    base: float
    height: float
    offset_top: float = 0.0
    kind: ClassVar[ShapeKind] = ShapeKind.PARALLELOGRAM

    def __post_init__(self):
        _check_number(self, "base", self.base)
        _check_number(self, "height", self.height)
        # Top edge may lean either way
        _check_number(self, "offset_top", self.offset_top, positive=False)

    def params(self):
        return {
            "base": _fmt(self.base),
            "height": _fmt(self.height),
            "offset_top": _fmt(self.offset_top),
        }


@dataclass(frozen=True)
class EquilateralTriangleDef(ShapeDef):
    side: float
    kind: ClassVar[ShapeKind] = ShapeKind.EQUILATERAL_TRIANGLE

    def __post_init__(self):
        _check_number(self, "side", self.side)

    def params(self):
        return {"side": _fmt(self.side)}


@dataclass(frozen=True)
class PolygonDef(ShapeDef):
    """Free-form polygon; corners with r > 0 are rounded."""

    points: Tuple[CornerPoint, ...]
    kind: ClassVar[ShapeKind] = ShapeKind.POLYGON

    def __post_init__(self):
        points = tuple(CornerPoint(*p) for p in self.points)
        if len(points) < 3:
            raise InvalidParameter("points", f"need at least 3 points, got {len(points)}", _owner(self))
        for p in points:
            _check_number(self, "points", p.x, positive=False)
            _check_number(self, "points", p.y, positive=False)
            _check_number(self, "r", p.r, positive=False)
            if p.r < 0:
                raise InvalidParameter("r", f"corner radius must be >= 0, got {p.r}", _owner(self))
        object.__setattr__(self, "points", points)

    @property
    def corner_mean(self) -> np.ndarray:
        return np.array([(p.x, p.y) for p in self.points]).mean(axis=0)

    def params(self):
        return {
            "points": [
                [_fmt(p.x), _fmt(p.y), _fmt(p.r)] if p.r > 0 else [_fmt(p.x), _fmt(p.y)]
                for p in self.points
            ]
        }


# ============================================================================
# Parsing (catalog / puzzle JSON objects -> variants)
# ============================================================================

def _read_number(data: Mapping[str, Any], key: str, owner: str, default: Any = None) -> Any:
    if key not in data:
        if default is not None:
            return default
        raise InvalidParameter(key, "missing", owner)
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(key, f"expected a number, got {value!r}", owner)
    return value


def _read_points(data: Mapping[str, Any], owner: str) -> Tuple[CornerPoint, ...]:
    raw = data.get("points")
    if not isinstance(raw, (list, tuple)):
        raise InvalidParameter("points", "expected a list of [x, y] or [x, y, r]", owner)
    points = []
    for entry in raw:
        if not isinstance(entry, (list, tuple)) or len(entry) not in (2, 3):
            raise InvalidParameter("points", f"bad point {entry!r}", owner)
        for value in entry:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidParameter("points", f"bad point {entry!r}", owner)
        points.append(CornerPoint(*entry))
    return tuple(points)


def _labels(data: Mapping[str, Any]) -> Dict[str, Optional[str]]:
    labels = {}
    for key in ("label_en", "label_zh", "label"):
        value = data.get(key)
        labels[key] = str(value) if value is not None else None
    return labels


def _parse_circle(shape_id, data, owner):
    if "d" in data:
        diameter = _read_number(data, "d", owner)
    elif "r" in data:
        diameter = 2 * _read_number(data, "r", owner)
    else:
        raise InvalidParameter("d", "missing (give d or r)", owner)
    return CircleDef(shape_id, diameter, **_labels(data))


def _parse_regular_polygon(shape_id, data, owner):
    n = _read_number(data, "n", owner)
    if isinstance(n, float) and n.is_integer():
        n = int(n)
    return RegularPolygonDef(shape_id, n, _read_number(data, "side", owner), **_labels(data))


_PARSERS: Dict[ShapeKind, Callable[[Optional[str], Mapping[str, Any], str], ShapeDef]] = {
    ShapeKind.CIRCLE: _parse_circle,
    ShapeKind.RECT: lambda i, d, o: RectDef(
        i, _read_number(d, "w", o), _read_number(d, "h", o), **_labels(d)),
    ShapeKind.REGULAR_POLYGON: _parse_regular_polygon,
    ShapeKind.RIGHT_TRIANGLE: lambda i, d, o: RightTriangleDef(
        i, _read_number(d, "a", o), _read_number(d, "b", o), **_labels(d)),
    ShapeKind.ISOSCELES_TRAPEZOID: lambda i, d, o: IsoscelesTrapezoidDef(
        i, _read_number(d, "base_bottom", o), _read_number(d, "base_top", o),
        _read_number(d, "height", o), **_labels(d)),
    ShapeKind.PARALLELOGRAM: lambda i, d, o: ParallelogramDef(
        i, _read_number(d, "base", o), _read_number(d, "height", o),
        _read_number(d, "offset_top", o, default=0.0), **_labels(d)),
    ShapeKind.EQUILATERAL_TRIANGLE: lambda i, d, o: EquilateralTriangleDef(
        i, _read_number(d, "side", o), **_labels(d)),
    ShapeKind.POLYGON: lambda i, d, o: PolygonDef(i, _read_points(d, o), **_labels(d)),
}


def shape_def_from_dict(data: Mapping[str, Any], shape_id: Optional[str] = None) -> ShapeDef:
    """
    Build a shape variant from a catalog entry.

    Args:
        data: {"id", "type", ...params, "label_en"?, "label_zh"?, "label"?}
        shape_id: Overrides data["id"] (inline puzzle shapes pass None)

    Raises:
        MalformedDefinition: Entry is not an object
        InvalidShapeKind: "type" is not a known kind
        InvalidParameter: Missing or invalid parameter
    """
    if not isinstance(data, Mapping):
        raise MalformedDefinition(f"Shape entry must be an object, got {type(data).__name__}")

    if shape_id is None:
        raw_id = data.get("id")
        shape_id = str(raw_id) if raw_id is not None else None

    raw_kind = data.get("type", data.get("kind"))
    try:
        kind = ShapeKind(raw_kind)
    except ValueError:
        raise InvalidShapeKind(raw_kind, shape_id) from None

    owner = shape_id or kind.value
    return _PARSERS[kind](shape_id, data, owner)


# ============================================================================
# Resolution (variant -> local outline)
# ============================================================================

def _rect_vertices(shape: RectDef) -> np.ndarray:
    hw, hh = shape.w / 2.0, shape.h / 2.0
    return np.array([[-hw, -hh], [hw, -hh], [hw, hh], [-hw, hh]])


def _equilateral_vertices(shape: EquilateralTriangleDef) -> np.ndarray:
    s = shape.side
    h = s * math.sqrt(3.0) / 2.0
    return np.array([[0.0, 0.0], [s, 0.0], [s / 2.0, h]]) - np.array([s / 2.0, h / 3.0])


def _right_triangle_vertices(shape: RightTriangleDef) -> np.ndarray:
    a, b = shape.a, shape.b
    return np.array([[0.0, 0.0], [a, 0.0], [0.0, b]]) - np.array([a / 3.0, b / 3.0])


def _ring(count: int, radius: float) -> np.ndarray:
    angles = 2.0 * math.pi * np.arange(count) / count
    return radius * np.column_stack([np.cos(angles), np.sin(angles)])


def _regular_polygon_vertices(shape: RegularPolygonDef) -> np.ndarray:
    return _ring(shape.n, shape.circumradius)


def _circle_vertices(shape: CircleDef) -> np.ndarray:
    return _ring(CIRCLE_SEGMENTS, shape.diameter / 2.0)


def _trapezoid_vertices(shape: IsoscelesTrapezoidDef) -> np.ndarray:
    bb, bt, h = shape.base_bottom, shape.base_top, shape.height
    v = np.array([[0.0, 0.0], [bb, 0.0], [(bb + bt) / 2.0, h], [(bb - bt) / 2.0, h]])
    return v - v.mean(axis=0)


def _parallelogram_vertices(shape: ParallelogramDef) -> np.ndarray:
    b, h, off = shape.base, shape.height, shape.offset_top
    v = np.array([[0.0, 0.0], [b, 0.0], [off + b, h], [off, h]])
    return v - v.mean(axis=0)


def _polygon_vertices(shape: PolygonDef) -> np.ndarray:
    corners = list(shape.points)
    declared = Polygon.from_points([(c.x, c.y) for c in corners])
    if declared.area <= 1e-9:
        raise InvalidParameter("points", "polygon has zero area", _owner(shape))
    if declared.signed_area < 0:
        corners.reverse()

    cx, cy = shape.corner_mean
    shifted = [CornerPoint(c.x - cx, c.y - cy, c.r) for c in corners]
    return round_corners(shifted, _owner(shape))


_RESOLVERS: Dict[type, Callable[[Any], np.ndarray]] = {
    CircleDef: _circle_vertices,
    RectDef: _rect_vertices,
    RegularPolygonDef: _regular_polygon_vertices,
    RightTriangleDef: _right_triangle_vertices,
    IsoscelesTrapezoidDef: _trapezoid_vertices,
    ParallelogramDef: _parallelogram_vertices,
    EquilateralTriangleDef: _equilateral_vertices,
    PolygonDef: _polygon_vertices,
}


def resolve(shape: ShapeDef) -> Outline:
    """
    Resolve a shape definition into its local-frame outline.

    Args:
        shape: Any ShapeDef variant

    Returns:
        Counter-clockwise Polygon anchored at the shape's reference point

    Raises:
        InvalidShapeKind: Not one of the known variants
        InvalidParameter: Geometry cannot be built (e.g. rounding radius
            that does not fit)
    """
    resolver = _RESOLVERS.get(type(shape))
    if resolver is None:
        raise InvalidShapeKind(type(shape).__name__, getattr(shape, "id", None))
    return Polygon(resolver(shape)).as_ccw()
