"""
Geometric Shapes Module
========================

Pure geometric representations - NO state, NO side effects.

Design:
- Immutable polygons (frozen dataclass, read-only vertex array)
- Implicit closing edge (last vertex connects back to the first)
- Millimeter units, y axis pointing up (board space)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

import numpy as np

# Geometric tolerance in millimeters
EPSILON = 1e-6


class PointLocation(str, Enum):
    """Classification of a point against a closed polygon."""

    INSIDE = "inside"
    ON_BOUNDARY = "on_boundary"
    OUTSIDE = "outside"


@dataclass(frozen=True, eq=False)
class Polygon:
    """
    Immutable closed polygon.

    Attributes:
        vertices: Nx2 float array of (x, y) vertices, N >= 3
    """

    vertices: np.ndarray

    def __post_init__(self):
        vertices = np.array(self.vertices, dtype=np.float64)
        if vertices.ndim != 2 or vertices.shape[1] != 2:
            raise ValueError(f"vertices must be Nx2 array, got shape {vertices.shape}")
        if len(vertices) < 3:
            raise ValueError(f"Polygon must have at least 3 vertices, got {len(vertices)}")
        if not np.all(np.isfinite(vertices)):
            raise ValueError("Polygon vertices must be finite")

        vertices.flags.writeable = False
        object.__setattr__(self, 'vertices', vertices)

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]]) -> "Polygon":
        return cls(np.asarray(points, dtype=np.float64))

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def signed_area(self) -> float:
        """Shoelace area; positive for counter-clockwise winding."""
        x = self.vertices[:, 0]
        y = self.vertices[:, 1]
        return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))

    @property
    def area(self) -> float:
        return abs(self.signed_area)

    @property
    def is_ccw(self) -> bool:
        return self.signed_area > 0

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y)"""
        mins = self.vertices.min(axis=0)
        maxs = self.vertices.max(axis=0)
        return float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1])

    @property
    def size(self) -> Tuple[float, float]:
        """(width, height) of the axis-aligned bounding box."""
        min_x, min_y, max_x, max_y = self.bounds
        return max_x - min_x, max_y - min_y

    def vertex_mean(self) -> np.ndarray:
        return self.vertices.mean(axis=0)

    def translated(self, dx: float, dy: float) -> "Polygon":
        return Polygon(self.vertices + np.array([dx, dy]))

    def reversed(self) -> "Polygon":
        return Polygon(self.vertices[::-1])

    def as_ccw(self) -> "Polygon":
        """Same polygon with counter-clockwise winding."""
        return self if self.signed_area >= 0 else self.reversed()

    def to_list(self) -> list:
        return [[float(x), float(y)] for x, y in self.vertices]

    def __repr__(self) -> str:
        return f"Polygon(n={len(self.vertices)}, bounds={self.bounds})"
