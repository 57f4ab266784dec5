"""Shape catalog: shape variants, outline resolution, boards and labels."""

from .rounding import ARC_SEGMENTS_PER_QUARTER, CornerPoint, round_corners
from .shapes import (
    CIRCLE_SEGMENTS,
    CircleDef,
    EquilateralTriangleDef,
    IsoscelesTrapezoidDef,
    Outline,
    ParallelogramDef,
    PolygonDef,
    RectDef,
    RegularPolygonDef,
    RightTriangleDef,
    ShapeDef,
    ShapeKind,
    resolve,
    shape_def_from_dict,
)
from .labels import dimension_label, fmt_mm, shape_label_lines
from .board import Board, BoardKind, CutCorner
from .registry import ShapeCatalog

__all__ = [
    "ARC_SEGMENTS_PER_QUARTER",
    "CIRCLE_SEGMENTS",
    "Board",
    "BoardKind",
    "CircleDef",
    "CornerPoint",
    "CutCorner",
    "EquilateralTriangleDef",
    "IsoscelesTrapezoidDef",
    "Outline",
    "ParallelogramDef",
    "PolygonDef",
    "RectDef",
    "RegularPolygonDef",
    "RightTriangleDef",
    "ShapeCatalog",
    "ShapeDef",
    "ShapeKind",
    "dimension_label",
    "fmt_mm",
    "resolve",
    "round_corners",
    "shape_def_from_dict",
    "shape_label_lines",
]
