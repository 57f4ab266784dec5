"""Tests for point classification, crossings, overlap and containment."""

import numpy as np
import pytest

from tessera_board.geometry import (
    PointLocation,
    Polygon,
    interior_point,
    point_in_polygon,
    polygon_contains_polygon,
    polygons_overlap,
    segments_intersect,
)

from conftest import square

L_SHAPE = [(0, 0), (40, 0), (40, 20), (20, 20), (20, 40), (0, 40)]


class TestPolygon:
    def test_rejects_fewer_than_three_vertices(self) -> None:
        with pytest.raises(ValueError):
            Polygon.from_points([(0, 0), (1, 1)])

    def test_rejects_non_finite_vertices(self) -> None:
        with pytest.raises(ValueError):
            Polygon.from_points([(0, 0), (1, 0), (np.nan, 1)])

    def test_area_and_winding(self) -> None:
        cw = Polygon.from_points(list(reversed(square(0, 0))))
        assert cw.signed_area == pytest.approx(-100.0)
        assert cw.area == pytest.approx(100.0)
        assert not cw.is_ccw
        assert cw.as_ccw().is_ccw

    def test_vertices_are_read_only(self) -> None:
        polygon = Polygon.from_points(square(0, 0))
        with pytest.raises(ValueError):
            polygon.vertices[0, 0] = 5.0

    def test_bounds_and_translation(self) -> None:
        polygon = Polygon.from_points(square(0, 0)).translated(5, -2)
        assert polygon.bounds == pytest.approx((5, -2, 15, 8))
        assert polygon.size == pytest.approx((10, 10))


class TestPointInPolygon:
    @pytest.mark.parametrize(
        ("point", "expected"),
        [
            ((5, 5), PointLocation.INSIDE),
            ((10, 5), PointLocation.ON_BOUNDARY),
            ((0, 0), PointLocation.ON_BOUNDARY),
            ((15, 5), PointLocation.OUTSIDE),
            ((-1e-3, 5), PointLocation.OUTSIDE),
        ],
    )
    def test_square(self, point, expected) -> None:
        assert point_in_polygon(point, square(0, 0)) is expected

    def test_boundary_tolerance(self) -> None:
        assert point_in_polygon((10 + 1e-7, 5), square(0, 0)) is PointLocation.ON_BOUNDARY

    def test_notch_of_concave_polygon_is_outside(self) -> None:
        assert point_in_polygon((30, 30), L_SHAPE) is PointLocation.OUTSIDE
        assert point_in_polygon((10, 30), L_SHAPE) is PointLocation.INSIDE

    def test_winding_does_not_matter(self) -> None:
        assert point_in_polygon((5, 5), list(reversed(square(0, 0)))) is PointLocation.INSIDE


class TestSegmentsIntersect:
    def test_proper_crossing(self) -> None:
        assert segments_intersect((0, 0), (2, 2), (0, 2), (2, 0))

    def test_shared_endpoint_is_not_a_crossing(self) -> None:
        assert not segments_intersect((0, 0), (1, 1), (1, 1), (2, 0))

    def test_t_junction_is_not_a_crossing(self) -> None:
        assert not segments_intersect((0, 0), (2, 0), (1, 0), (1, 1))

    def test_collinear_overlap_is_not_a_crossing(self) -> None:
        assert not segments_intersect((0, 0), (2, 0), (1, 0), (3, 0))

    def test_disjoint(self) -> None:
        assert not segments_intersect((0, 0), (1, 0), (0, 1), (1, 1))


class TestPolygonsOverlap:
    def test_polygon_overlaps_itself(self) -> None:
        assert polygons_overlap(square(0, 0), square(0, 0))
        assert polygons_overlap(L_SHAPE, L_SHAPE)

    def test_partial_overlap(self) -> None:
        assert polygons_overlap(square(0, 0), square(5, 5))

    def test_shared_edge_is_not_overlap(self) -> None:
        assert not polygons_overlap(square(0, 0), square(10, 0))

    def test_touching_corner_is_not_overlap(self) -> None:
        assert not polygons_overlap(square(0, 0), square(10, 10))

    def test_separated(self) -> None:
        assert not polygons_overlap(square(0, 0), square(20, 0))

    def test_contained_polygon_overlaps(self) -> None:
        assert polygons_overlap(square(0, 0, 30), square(10, 10, 5))
        assert polygons_overlap(square(10, 10, 5), square(0, 0, 30))

    def test_cross_shape_without_vertices_inside(self) -> None:
        wide = [(0, 10), (30, 10), (30, 20), (0, 20)]
        tall = [(10, 0), (20, 0), (20, 30), (10, 30)]
        assert polygons_overlap(wide, tall)

    def test_piece_in_notch_does_not_overlap(self) -> None:
        assert not polygons_overlap(L_SHAPE, square(20, 20, 20))

    def test_sliding_along_shared_edge_overlaps_once_offset(self) -> None:
        assert not polygons_overlap(square(0, 0), square(10, 3))
        assert polygons_overlap(square(0, 0), square(9.5, 3))

    def test_symmetric(self) -> None:
        p, q = square(0, 0), [(5, -5), (15, 5), (5, 15), (-5, 5)]
        assert polygons_overlap(p, q) == polygons_overlap(q, p)


class TestContainment:
    def test_inside(self) -> None:
        assert polygon_contains_polygon(square(0, 0, 100), square(10, 10))

    def test_touching_boundary_counts_as_inside(self) -> None:
        assert polygon_contains_polygon(square(0, 0, 100), square(0, 0))
        assert polygon_contains_polygon(square(0, 0, 100), square(90, 90))

    def test_sticking_out(self) -> None:
        assert not polygon_contains_polygon(square(0, 0, 100), square(95, 50))

    def test_spanning_a_notch(self) -> None:
        # Every vertex is inside the L, but the top edge crosses the notch
        inner = [(5, 5), (35, 5), (35, 15), (15, 35), (5, 35)]
        assert not polygon_contains_polygon(L_SHAPE, inner)

    def test_notch_edge_contact(self) -> None:
        assert polygon_contains_polygon(L_SHAPE, square(10, 10, 10))


class TestInteriorPoint:
    def test_interior_point_of_concave_polygon(self) -> None:
        point = interior_point(L_SHAPE)
        assert point_in_polygon(point, L_SHAPE) is PointLocation.INSIDE
