"""
Dimension labels for shapes and boards.

Labels state exact dimensions in millimeters, e.g. "Rectangle (30×60 mm)".
"""

from typing import List

from .shapes import (
    CircleDef,
    EquilateralTriangleDef,
    IsoscelesTrapezoidDef,
    ParallelogramDef,
    PolygonDef,
    RectDef,
    RegularPolygonDef,
    RightTriangleDef,
    ShapeDef,
)

_POLYGON_NAMES = {3: "triangle", 4: "square", 5: "pentagon", 6: "hexagon", 8: "octagon"}


def fmt_mm(value: float) -> str:
    """Near-integers print as integers, otherwise up to 3 decimals."""
    rounded = round(value)
    if abs(value - rounded) < 1e-9:
        return str(int(rounded))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def dimension_label(shape: ShapeDef) -> str:
    if isinstance(shape, CircleDef):
        return f"Circle (diameter {fmt_mm(shape.diameter)} mm)"
    if isinstance(shape, RectDef):
        if shape.is_square:
            return f"Square (side {fmt_mm(shape.w)} mm)"
        return f"Rectangle ({fmt_mm(shape.w)}×{fmt_mm(shape.h)} mm)"
    if isinstance(shape, RegularPolygonDef):
        name = _POLYGON_NAMES.get(shape.n, f"{shape.n}-gon")
        return f"Regular {name} (side {fmt_mm(shape.side)} mm)"
    if isinstance(shape, EquilateralTriangleDef):
        return f"Equilateral triangle (side {fmt_mm(shape.side)} mm)"
    if isinstance(shape, RightTriangleDef):
        return f"Right triangle (legs {fmt_mm(shape.a)}×{fmt_mm(shape.b)} mm)"
    if isinstance(shape, IsoscelesTrapezoidDef):
        return (
            f"Isosceles trapezoid (bottom {fmt_mm(shape.base_bottom)} mm, "
            f"top {fmt_mm(shape.base_top)} mm, height {fmt_mm(shape.height)} mm)"
        )
    if isinstance(shape, ParallelogramDef):
        return (
            f"Parallelogram (base {fmt_mm(shape.base)} mm, "
            f"top offset {fmt_mm(shape.offset_top)} mm, height {fmt_mm(shape.height)} mm)"
        )
    if isinstance(shape, PolygonDef):
        xs = [p.x for p in shape.points]
        ys = [p.y for p in shape.points]
        return (
            f"Polygon ({len(shape.points)} corners, "
            f"{fmt_mm(max(xs) - min(xs))}×{fmt_mm(max(ys) - min(ys))} mm)"
        )
    return shape.kind.value


def shape_label_lines(shape: ShapeDef, language: str = "en") -> List[str]:
    """Catalog label for the language (if any) followed by the dimension label."""
    dimensions = dimension_label(shape)
    custom = shape.catalog_label(language)
    if custom and custom != dimensions:
        return [custom, dimensions]
    return [dimensions]
