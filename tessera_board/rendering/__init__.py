"""Rendering: rasterize blueprint descriptions with supervision/OpenCV."""

from .rasterizer import BlueprintRasterizer, to_ascii

__all__ = ["BlueprintRasterizer", "to_ascii"]
