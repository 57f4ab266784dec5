"""Blueprint: printable layout of the board and the pieces to cut."""

from .description import (
    BlueprintRow,
    DrawCommand,
    LineCommand,
    PathCommand,
    RasterDescription,
    RectCommand,
    TextAnchor,
    TextCommand,
)
from .layout import layout_blueprint

__all__ = [
    "BlueprintRow",
    "DrawCommand",
    "LineCommand",
    "PathCommand",
    "RasterDescription",
    "RectCommand",
    "TextAnchor",
    "TextCommand",
    "layout_blueprint",
]
