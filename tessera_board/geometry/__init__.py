"""Pure geometry: immutable polygons and tolerance-aware predicates."""

from .shapes import EPSILON, PointLocation, Polygon
from .kernel import (
    as_vertices,
    edges_cross,
    interior_point,
    point_in_polygon,
    polygon_bounds,
    polygon_contains_polygon,
    polygons_overlap,
    segments_intersect,
    signed_area,
)

__all__ = [
    "EPSILON",
    "PointLocation",
    "Polygon",
    "as_vertices",
    "edges_cross",
    "interior_point",
    "point_in_polygon",
    "polygon_bounds",
    "polygon_contains_polygon",
    "polygons_overlap",
    "segments_intersect",
    "signed_area",
]
