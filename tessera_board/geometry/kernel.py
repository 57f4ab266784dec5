"""
Geometry Kernel
===============

Bounded Context: Exact-tolerance polygon predicates.

This module answers the three questions the constraint engine asks:
is a point inside a polygon, do two polygons overlap, and does one polygon
contain another. None of the predicates assume convexity.

Design:
- Stateless functions over Polygon or Nx2 arrays (numpy vectorized)
- Tolerance EPSILON (1e-6 mm) for boundary classification
- Touching is NOT overlapping: pieces may share edges and vertices
- Bounding-box prefilter before any edge work

Overlap strategy (interiors intersect):
    1. proper edge crossing                      -> overlap
    2. any vertex strictly inside the other      -> overlap
    3. boundary pieces (edges split at contacts)
       with a midpoint strictly inside the other -> overlap
    4. an interior point of either polygon
       strictly inside the other (coincident)    -> overlap
"""

from typing import Sequence, Tuple, Union

import numpy as np

from .shapes import EPSILON, PointLocation, Polygon

PolygonLike = Union[Polygon, np.ndarray, Sequence[Sequence[float]]]


def as_vertices(polygon: PolygonLike) -> np.ndarray:
    if isinstance(polygon, Polygon):
        return polygon.vertices
    return np.asarray(polygon, dtype=np.float64)


def _edges(vertices: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Start and end points of every edge, closing edge included."""
    return vertices, np.roll(vertices, -1, axis=0)


def _cross(u: np.ndarray, v: np.ndarray) -> np.ndarray:
    return u[..., 0] * v[..., 1] - u[..., 1] * v[..., 0]


def signed_area(polygon: PolygonLike) -> float:
    v = as_vertices(polygon)
    start, end = _edges(v)
    return 0.5 * float(_cross(start, end).sum())


def polygon_bounds(polygon: PolygonLike) -> Tuple[float, float, float, float]:
    v = as_vertices(polygon)
    mins = v.min(axis=0)
    maxs = v.max(axis=0)
    return float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1])


def _segment_distances(point: np.ndarray, start: np.ndarray, end: np.ndarray) -> np.ndarray:
    """Distance from one point to each segment start[i] -> end[i]."""
    d = end - start
    length_sq = (d * d).sum(axis=1)
    safe = np.where(length_sq > 0, length_sq, 1.0)
    t = np.clip(((point - start) * d).sum(axis=1) / safe, 0.0, 1.0)
    projection = start + t[:, None] * d
    return np.linalg.norm(point - projection, axis=1)


def point_in_polygon(
    point: Sequence[float],
    polygon: PolygonLike,
    eps: float = EPSILON,
) -> PointLocation:
    """
    Classify a point against a closed polygon.

    Boundary if within eps of any edge, otherwise crossing-number parity of
    a ray cast towards +x.

    Args:
        point: (x, y)
        polygon: Closed polygon (any winding)
        eps: Boundary tolerance in mm

    Returns:
        PointLocation.INSIDE, ON_BOUNDARY or OUTSIDE
    """
    p = np.asarray(point, dtype=np.float64)
    v = as_vertices(polygon)
    start, end = _edges(v)

    if np.any(_segment_distances(p, start, end) <= eps):
        return PointLocation.ON_BOUNDARY

    y0 = start[:, 1]
    y1 = end[:, 1]
    straddles = (y0 > p[1]) != (y1 > p[1])
    with np.errstate(divide="ignore", invalid="ignore"):
        x_at = start[:, 0] + (p[1] - y0) * (end[:, 0] - start[:, 0]) / (y1 - y0)
    crossings = np.count_nonzero(straddles & (p[0] < x_at))

    return PointLocation.INSIDE if crossings % 2 == 1 else PointLocation.OUTSIDE


def _side_distance(a: np.ndarray, b: np.ndarray, p: np.ndarray) -> np.ndarray:
    """Signed distance of p from the line a->b (positive on the left)."""
    d = b - a
    length = np.linalg.norm(d, axis=-1)
    safe = np.where(length > 0, length, 1.0)
    return _cross(d, p - a) / safe


def segments_intersect(
    a1: Sequence[float],
    a2: Sequence[float],
    b1: Sequence[float],
    b2: Sequence[float],
    eps: float = EPSILON,
) -> bool:
    """
    Proper crossing test.

    True only when each segment's endpoints lie strictly (beyond eps) on
    opposite sides of the other segment's line. Endpoint touches and
    collinear overlaps return False.
    """
    a1, a2, b1, b2 = (np.asarray(p, dtype=np.float64) for p in (a1, a2, b1, b2))
    if np.linalg.norm(a2 - a1) <= eps or np.linalg.norm(b2 - b1) <= eps:
        return False

    d1 = float(_side_distance(b1, b2, a1))
    d2 = float(_side_distance(b1, b2, a2))
    d3 = float(_side_distance(a1, a2, b1))
    d4 = float(_side_distance(a1, a2, b2))

    return _strictly_opposite(d1, d2, eps) and _strictly_opposite(d3, d4, eps)


def _strictly_opposite(d1, d2, eps):
    return ((d1 > eps) & (d2 < -eps)) | ((d1 < -eps) & (d2 > eps))


def _crossing_matrix(p: np.ndarray, q: np.ndarray, eps: float) -> np.ndarray:
    """Boolean (len(p), len(q)) matrix of proper crossings between edges."""
    pa, pb = _edges(p)
    qa, qb = _edges(q)

    # Broadcast: p edges along axis 0, q edges along axis 1
    pa_, pb_ = pa[:, None, :], pb[:, None, :]
    qa_, qb_ = qa[None, :, :], qb[None, :, :]

    d1 = _side_distance(qa_, qb_, pa_)
    d2 = _side_distance(qa_, qb_, pb_)
    d3 = _side_distance(pa_, pb_, qa_)
    d4 = _side_distance(pa_, pb_, qb_)

    p_ok = (np.linalg.norm(pb - pa, axis=1) > eps)[:, None]
    q_ok = (np.linalg.norm(qb - qa, axis=1) > eps)[None, :]

    return _strictly_opposite(d1, d2, eps) & _strictly_opposite(d3, d4, eps) & p_ok & q_ok


def edges_cross(p: PolygonLike, q: PolygonLike, eps: float = EPSILON) -> bool:
    """True if any edge of p properly crosses any edge of q."""
    return bool(_crossing_matrix(as_vertices(p), as_vertices(q), eps).any())


def _boundary_samples(p: np.ndarray, q: np.ndarray, eps: float) -> np.ndarray:
    """
    Midpoints of p's edges after splitting them wherever q's boundary
    touches or meets them.

    Each sample lies on a piece of p's boundary that is entirely inside,
    on, or outside q, so classifying the sample classifies the piece.
    """
    qa, qb = _edges(q)
    qd = qb - qa
    samples = []

    for a, b in zip(*_edges(p)):
        d = b - a
        length_sq = float(d @ d)
        if length_sq <= eps * eps:
            continue
        length = np.sqrt(length_sq)
        ts = [0.0, 1.0]

        # q vertices lying on this edge
        t_v = ((q - a) @ d) / length_sq
        projection = a + t_v[:, None] * d
        near = (np.linalg.norm(q - projection, axis=1) <= eps) & (t_v > 0) & (t_v < 1)
        ts.extend(t_v[near].tolist())

        # q edges meeting this edge
        denom = _cross(d[None, :], qd)
        ok = np.abs(denom) > 1e-12
        safe = np.where(ok, denom, 1.0)
        w = qa - a
        t = _cross(w, qd) / safe
        s = _cross(w, d[None, :]) / safe
        tol = eps / np.maximum(np.linalg.norm(qd, axis=1), eps)
        hit = ok & (t > 0) & (t < 1) & (s >= -tol) & (s <= 1 + tol)
        ts.extend(t[hit].tolist())

        ts = np.unique(np.asarray(ts))
        keep = np.diff(ts) * length > eps
        mids = ((ts[:-1] + ts[1:]) / 2.0)[keep]
        if len(mids):
            samples.append(a + mids[:, None] * d)

    if not samples:
        return np.empty((0, 2))
    return np.vstack(samples)


def interior_point(polygon: PolygonLike) -> np.ndarray:
    """
    A point strictly inside a non-degenerate polygon.

    Casts a horizontal scanline through the widest vertical gap between
    vertex heights and returns the middle of the widest inside span.
    """
    v = as_vertices(polygon)
    ys = np.unique(v[:, 1])
    if len(ys) < 2:
        return v.mean(axis=0)

    gap = int(np.argmax(np.diff(ys)))
    y = (ys[gap] + ys[gap + 1]) / 2.0

    start, end = _edges(v)
    straddles = (start[:, 1] > y) != (end[:, 1] > y)
    s, e = start[straddles], end[straddles]
    xs = np.sort(s[:, 0] + (y - s[:, 1]) * (e[:, 0] - s[:, 0]) / (e[:, 1] - s[:, 1]))

    spans = xs[1::2] - xs[0::2]
    best = int(np.argmax(spans))
    return np.array([(xs[2 * best] + xs[2 * best + 1]) / 2.0, y])


def _bounds_disjoint(p: np.ndarray, q: np.ndarray, eps: float) -> bool:
    """True if bounding boxes are separated or only touch."""
    p_min, p_max = p.min(axis=0), p.max(axis=0)
    q_min, q_max = q.min(axis=0), q.max(axis=0)
    return bool(np.any(p_max <= q_min + eps) or np.any(q_max <= p_min + eps))


def _any_strictly_inside(points: np.ndarray, polygon: np.ndarray, eps: float) -> bool:
    return any(point_in_polygon(pt, polygon, eps) is PointLocation.INSIDE for pt in points)


def polygons_overlap(p: PolygonLike, q: PolygonLike, eps: float = EPSILON) -> bool:
    """
    True iff the interiors of p and q intersect.

    Shared edges and touching vertices do not count. polygons_overlap(p, p)
    is True for any non-degenerate p.
    """
    pv, qv = as_vertices(p), as_vertices(q)

    if _bounds_disjoint(pv, qv, eps):
        return False

    if _crossing_matrix(pv, qv, eps).any():
        return True

    if _any_strictly_inside(pv, qv, eps) or _any_strictly_inside(qv, pv, eps):
        return True

    if _any_strictly_inside(_boundary_samples(pv, qv, eps), qv, eps):
        return True
    if _any_strictly_inside(_boundary_samples(qv, pv, eps), pv, eps):
        return True

    # Boundaries coincide everywhere they meet: identical polygons
    return (
        point_in_polygon(interior_point(pv), qv, eps) is PointLocation.INSIDE
        or point_in_polygon(interior_point(qv), pv, eps) is PointLocation.INSIDE
    )


def polygon_contains_polygon(
    outer: PolygonLike,
    inner: PolygonLike,
    eps: float = EPSILON,
) -> bool:
    """
    True iff inner lies within outer (boundary contact allowed).

    Checks every inner vertex, then proper crossings, then the pieces of
    inner's edges between contacts with outer's boundary, which catches a
    non-convex outer whose notch an inner edge spans.
    """
    ov, iv = as_vertices(outer), as_vertices(inner)

    o_min, o_max = ov.min(axis=0), ov.max(axis=0)
    i_min, i_max = iv.min(axis=0), iv.max(axis=0)
    if np.any(i_min < o_min - eps) or np.any(i_max > o_max + eps):
        return False

    for vertex in iv:
        if point_in_polygon(vertex, ov, eps) is PointLocation.OUTSIDE:
            return False

    if _crossing_matrix(iv, ov, eps).any():
        return False

    for sample in _boundary_samples(iv, ov, eps):
        if point_in_polygon(sample, ov, eps) is PointLocation.OUTSIDE:
            return False

    return True
