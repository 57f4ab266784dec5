"""
Raster Description
==================

Resolution-independent drawing commands produced by the blueprint layout.

Coordinates are pixels with the origin at the top-left and y pointing down.
Text commands are positioned by the vertical middle of the line.

Consumers:
- RasterDescription.to_svg()          -> SVG document
- rendering.BlueprintRasterizer       -> numpy image / PNG bytes
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union
from xml.sax.saxutils import escape


class TextAnchor(str, Enum):
    START = "start"
    MIDDLE = "middle"


def _num(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class RectCommand:
    x: float
    y: float
    width: float
    height: float
    fill: str
    op: ClassVar[str] = "rect"

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op, "x": self.x, "y": self.y, "width": self.width,
                "height": self.height, "fill": self.fill}

    def to_svg(self) -> str:
        return (f'<rect x="{_num(self.x)}" y="{_num(self.y)}" width="{_num(self.width)}" '
                f'height="{_num(self.height)}" fill="{self.fill}"/>')


@dataclass(frozen=True)
class LineCommand:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float = 1.0
    op: ClassVar[str] = "line"

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op, "x1": self.x1, "y1": self.y1, "x2": self.x2, "y2": self.y2,
                "stroke": self.stroke, "stroke_width": self.stroke_width}

    def to_svg(self) -> str:
        return (f'<line x1="{_num(self.x1)}" y1="{_num(self.y1)}" x2="{_num(self.x2)}" '
                f'y2="{_num(self.y2)}" stroke="{self.stroke}" stroke-width="{_num(self.stroke_width)}"/>')


@dataclass(frozen=True)
class PathCommand:
    """Closed polyline."""

    points: Tuple[Tuple[float, float], ...]
    stroke: str
    stroke_width: float = 1.0
    fill: Optional[str] = None
    op: ClassVar[str] = "path"

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op, "points": [list(p) for p in self.points], "stroke": self.stroke,
                "stroke_width": self.stroke_width, "fill": self.fill}

    def to_svg(self) -> str:
        first, *rest = self.points
        d = f"M{_num(first[0])},{_num(first[1])} " + " ".join(
            f"L{_num(x)},{_num(y)}" for x, y in rest
        ) + " Z"
        return (f'<path d="{d}" fill="{self.fill or "none"}" stroke="{self.stroke}" '
                f'stroke-width="{_num(self.stroke_width)}"/>')


@dataclass(frozen=True)
class TextCommand:
    x: float
    y: float
    text: str
    font_size: float
    fill: str
    anchor: TextAnchor = TextAnchor.START
    op: ClassVar[str] = "text"

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op, "x": self.x, "y": self.y, "text": self.text,
                "font_size": self.font_size, "fill": self.fill, "anchor": self.anchor.value}

    def to_svg(self) -> str:
        return (f'<text x="{_num(self.x)}" y="{_num(self.y)}" fill="{self.fill}" '
                f'font-size="{_num(self.font_size)}" text-anchor="{self.anchor.value}" '
                f'dominant-baseline="middle">{escape(self.text)}</text>')


DrawCommand = Union[RectCommand, LineCommand, PathCommand, TextCommand]


@dataclass(frozen=True)
class BlueprintRow:
    """
    Row metadata.

    Attributes:
        kind: "board" or "shape"
        key: Shape group key (board row uses "board")
        label_lines: Text in the label column
        count: Copies drawn (0 for the board row)
        top_px / height_px: Vertical band of the row
    """

    kind: str
    key: str
    label_lines: Tuple[str, ...]
    count: int
    top_px: float
    height_px: float

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "key": self.key, "label_lines": list(self.label_lines),
                "count": self.count, "top_px": self.top_px, "height_px": self.height_px}


@dataclass(frozen=True)
class RasterDescription:
    """
    Printable blueprint: target size plus ordered drawing commands.

    Attributes:
        width_px, height_px: Target raster size
        px_per_mm: Scale the description was laid out for
        commands: Drawing commands, painted in order
        rows: Board row followed by one row per shape group
    """

    width_px: int
    height_px: int
    px_per_mm: float
    commands: Tuple[DrawCommand, ...] = field(default_factory=tuple)
    rows: Tuple[BlueprintRow, ...] = field(default_factory=tuple)

    def commands_of(self, op: str) -> List[DrawCommand]:
        return [c for c in self.commands if c.op == op]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width_px": self.width_px,
            "height_px": self.height_px,
            "px_per_mm": self.px_per_mm,
            "commands": [c.to_dict() for c in self.commands],
            "rows": [r.to_dict() for r in self.rows],
        }

    def to_svg(self, title: Optional[str] = None) -> str:
        lines = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width_px}" '
            f'height="{self.height_px}" viewBox="0 0 {self.width_px} {self.height_px}" '
            f'font-family="sans-serif">'
        ]
        if title:
            lines.append(f"<title>{escape(title)}</title>")
        lines.append(f"<desc>{_num(self.px_per_mm)} px/mm</desc>")
        lines.extend(c.to_svg() for c in self.commands)
        lines.append("</svg>")
        return "\n".join(lines) + "\n"
