"""
Rounded Corner Expansion
========================

Replaces polygon corners that carry a radius with a circular arc tangent to
both adjacent edges.

Design:
- Tangent length t = r / tan(theta / 2), theta = interior corner angle
- Arc center on the corner bisector at distance r / sin(theta / 2)
- Arc subdivided into ceil(16 * sweep / 90deg) segments, endpoints included
- Straight (collinear) corners are kept as plain vertices
"""

import math
from typing import NamedTuple, Optional, Sequence

import numpy as np

from tessera_board.errors import InvalidParameter
from tessera_board.geometry import EPSILON

ARC_SEGMENTS_PER_QUARTER = 16


class CornerPoint(NamedTuple):
    """Polygon corner with an optional rounding radius (mm)."""

    x: float
    y: float
    r: float = 0.0


def round_corners(corners: Sequence[CornerPoint], owner: Optional[str] = None) -> np.ndarray:
    """
    Expand rounded corners into arc vertices.

    Args:
        corners: Closed ring of corners, any winding
        owner: Shape or board id used in error messages

    Returns:
        Mx2 vertex array (M >= len(corners))

    Raises:
        InvalidParameter: Negative radius, or radii that do not fit on the
            adjacent edges
    """
    points = np.array([(c.x, c.y) for c in corners], dtype=np.float64)
    radii = [float(c.r) for c in corners]
    n = len(points)

    for r in radii:
        if r < 0:
            raise InvalidParameter("r", f"corner radius must be >= 0, got {r}", owner)
    if not any(r > 0 for r in radii):
        return points

    arcs = [None] * n
    tangents = [0.0] * n

    for i, r in enumerate(radii):
        if r == 0:
            continue

        cur = points[i]
        u = points[i - 1] - cur
        v = points[(i + 1) % n] - cur
        lu, lv = np.linalg.norm(u), np.linalg.norm(v)
        if lu <= EPSILON or lv <= EPSILON:
            raise InvalidParameter("points", f"rounded corner {i} has a zero-length edge", owner)
        u, v = u / lu, v / lv

        theta = math.acos(float(np.clip(u @ v, -1.0, 1.0)))
        if theta < 1e-9 or math.pi - theta < 1e-9:
            continue

        tangents[i] = r / math.tan(theta / 2.0)
        arcs[i] = (u, v, theta)

    for i in range(n):
        j = (i + 1) % n
        edge = float(np.linalg.norm(points[j] - points[i]))
        if tangents[i] + tangents[j] > edge + EPSILON:
            raise InvalidParameter(
                "r",
                f"corner radii at {i} and {j} do not fit on an edge of length {edge:g} mm",
                owner,
            )

    out = []
    for i in range(n):
        cur = points[i]
        if arcs[i] is None:
            out.append(cur)
            continue

        u, v, theta = arcs[i]
        r = radii[i]
        t = tangents[i]
        start = cur + u * t
        end = cur + v * t
        bisector = (u + v) / np.linalg.norm(u + v)
        center = cur + bisector * (r / math.sin(theta / 2.0))

        a0 = math.atan2(start[1] - center[1], start[0] - center[0])
        a1 = math.atan2(end[1] - center[1], end[0] - center[0])
        sweep = (a1 - a0 + math.pi) % (2.0 * math.pi) - math.pi
        segments = max(1, math.ceil(ARC_SEGMENTS_PER_QUARTER * abs(sweep) / (math.pi / 2.0) - 1e-9))

        for k in range(segments + 1):
            angle = a0 + sweep * k / segments
            out.append(center + r * np.array([math.cos(angle), math.sin(angle)]))

    return _drop_repeats(np.array(out))


def _drop_repeats(vertices: np.ndarray) -> np.ndarray:
    """Remove consecutive duplicates left where two arcs meet mid-edge."""
    keep = np.linalg.norm(vertices - np.roll(vertices, 1, axis=0), axis=1) > EPSILON
    if not keep.any():
        return vertices[:1]
    return vertices[keep]
