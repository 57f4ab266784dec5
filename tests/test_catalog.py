"""Tests for shape definitions, outline resolution and the catalog registry."""

import math

import numpy as np
import pytest

from tessera_board import (
    InvalidParameter,
    InvalidShapeKind,
    MalformedDefinition,
    ShapeCatalog,
    UnknownShapeReference,
    resolve,
    shape_def_from_dict,
)
from tessera_board.catalog import (
    ARC_SEGMENTS_PER_QUARTER,
    CIRCLE_SEGMENTS,
    CircleDef,
    CornerPoint,
    EquilateralTriangleDef,
    IsoscelesTrapezoidDef,
    ParallelogramDef,
    PolygonDef,
    RectDef,
    RegularPolygonDef,
    RightTriangleDef,
    ShapeDef,
    dimension_label,
    round_corners,
    shape_label_lines,
)

EVERY_KIND = [
    CircleDef("c", 30),
    RectDef("r", 30, 60),
    RegularPolygonDef("hex", 6, 20),
    RightTriangleDef("rt", 30, 40),
    IsoscelesTrapezoidDef("tz", 60, 30, 26),
    ParallelogramDef("pg", 40, 20, 20),
    ParallelogramDef("pg_neg", 40, 20, -15),
    EquilateralTriangleDef("eq", 30),
    PolygonDef("poly", (CornerPoint(0, 0), CornerPoint(0, 40), CornerPoint(40, 0))),
    PolygonDef("rounded", (CornerPoint(0, 0), CornerPoint(40, 0), CornerPoint(40, 40, 10), CornerPoint(0, 40))),
]


class TestResolve:
    @pytest.mark.parametrize("shape", EVERY_KIND, ids=lambda s: s.id)
    def test_every_kind_is_ccw_with_positive_area(self, shape: ShapeDef) -> None:
        outline = resolve(shape)
        assert len(outline) >= 3
        assert outline.area > 0
        assert outline.is_ccw

    def test_rect_is_centered(self) -> None:
        outline = resolve(RectDef("r", 30, 60))
        assert outline.bounds == pytest.approx((-15, -30, 15, 30))

    def test_circle_uses_fixed_segment_count(self) -> None:
        outline = resolve(CircleDef("c", 30))
        assert len(outline) == CIRCLE_SEGMENTS
        assert np.linalg.norm(outline.vertices, axis=1) == pytest.approx(np.full(CIRCLE_SEGMENTS, 15.0))

    def test_regular_polygon_first_vertex_on_positive_x(self) -> None:
        outline = resolve(RegularPolygonDef("hex", 6, 20))
        assert len(outline) == 6
        # Hexagon circumradius equals its side
        assert outline.vertices[0] == pytest.approx([20.0, 0.0])

    def test_equilateral_triangle_centroid_at_origin(self) -> None:
        outline = resolve(EquilateralTriangleDef("eq", 30))
        assert outline.vertex_mean() == pytest.approx([0.0, 0.0], abs=1e-9)
        assert outline.area == pytest.approx(math.sqrt(3) / 4 * 30 ** 2)

    def test_right_triangle_centroid_at_origin(self) -> None:
        outline = resolve(RightTriangleDef("rt", 30, 40))
        assert outline.vertex_mean() == pytest.approx([0.0, 0.0], abs=1e-9)
        assert outline.area == pytest.approx(600.0)

    def test_trapezoid_area(self) -> None:
        outline = resolve(IsoscelesTrapezoidDef("tz", 60, 30, 26))
        assert outline.area == pytest.approx((60 + 30) / 2 * 26)

    def test_parallelogram_area_ignores_offset(self) -> None:
        for offset in (0, 20, -15):
            assert resolve(ParallelogramDef("pg", 40, 20, offset)).area == pytest.approx(800.0)

    def test_clockwise_polygon_is_normalized(self) -> None:
        clockwise = PolygonDef("cw", (CornerPoint(0, 0), CornerPoint(0, 10), CornerPoint(10, 10), CornerPoint(10, 0)))
        outline = resolve(clockwise)
        assert outline.is_ccw
        assert outline.area == pytest.approx(100.0)

    def test_zero_area_polygon_rejected(self) -> None:
        flat = PolygonDef("flat", (CornerPoint(0, 0), CornerPoint(10, 0), CornerPoint(20, 0)))
        with pytest.raises(InvalidParameter):
            resolve(flat)

    def test_unknown_variant_rejected(self) -> None:
        with pytest.raises(InvalidShapeKind):
            resolve(ShapeDef("bare"))


class TestRoundCorners:
    def test_sharp_corners_untouched(self) -> None:
        corners = [CornerPoint(0, 0), CornerPoint(10, 0), CornerPoint(10, 10)]
        assert round_corners(corners) == pytest.approx(np.array([[0, 0], [10, 0], [10, 10]]))

    def test_quarter_arc_segments(self) -> None:
        corners = [CornerPoint(0, 0), CornerPoint(40, 0), CornerPoint(40, 40, 10), CornerPoint(0, 40)]
        vertices = round_corners(corners)
        # Three sharp corners plus the arc's end points and its intermediate vertices
        assert len(vertices) == 3 + ARC_SEGMENTS_PER_QUARTER + 1
        center = np.array([30.0, 30.0])
        arc = vertices[2:2 + ARC_SEGMENTS_PER_QUARTER + 1]
        assert np.linalg.norm(arc - center, axis=1) == pytest.approx(np.full(len(arc), 10.0))

    def test_rounded_square_area(self) -> None:
        r = 5.0
        corners = [CornerPoint(0, 0, r), CornerPoint(40, 0, r), CornerPoint(40, 40, r), CornerPoint(0, 40, r)]
        area = abs(_shoelace(round_corners(corners)))
        exact = 40 * 40 - (4 - math.pi) * r * r
        assert area == pytest.approx(exact, rel=1e-3)

    def test_radius_too_large(self) -> None:
        corners = [CornerPoint(0, 0, 30), CornerPoint(40, 0, 30), CornerPoint(40, 40), CornerPoint(0, 40)]
        with pytest.raises(InvalidParameter):
            round_corners(corners, "too_round")

    def test_negative_radius(self) -> None:
        corners = [CornerPoint(0, 0, -1), CornerPoint(10, 0), CornerPoint(0, 10)]
        with pytest.raises(InvalidParameter):
            round_corners(corners)


def _shoelace(v: np.ndarray) -> float:
    x, y = v[:, 0], v[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


class TestShapeDefFromDict:
    def test_circle_from_radius(self) -> None:
        shape = shape_def_from_dict({"id": "c", "type": "circle", "r": 10})
        assert shape == CircleDef("c", 20)

    def test_regular_polygon(self) -> None:
        shape = shape_def_from_dict({"id": "p", "type": "regular_polygon", "n": 5, "side": 20})
        assert isinstance(shape, RegularPolygonDef)
        assert shape.n == 5

    def test_labels_kept(self) -> None:
        shape = shape_def_from_dict({"id": "s", "type": "rect", "w": 30, "h": 30, "label_zh": "正方形"})
        assert shape.catalog_label("zh") == "正方形"
        assert shape.catalog_label("en") is None

    def test_polygon_points_with_radius(self) -> None:
        shape = shape_def_from_dict(
            {"id": "l", "type": "polygon", "points": [[0, 0], [40, 0], [40, 20], [20, 20], [20, 40, 5], [0, 40]]}
        )
        assert shape.points[4] == CornerPoint(20, 40, 5)

    def test_unknown_type(self) -> None:
        with pytest.raises(InvalidShapeKind):
            shape_def_from_dict({"id": "x", "type": "star"})

    @pytest.mark.parametrize(
        "data",
        [
            {"id": "c", "type": "circle"},
            {"id": "c", "type": "circle", "d": 0},
            {"id": "r", "type": "rect", "w": 10, "h": -1},
            {"id": "r", "type": "rect", "w": "10", "h": 10},
            {"id": "p", "type": "regular_polygon", "n": 2, "side": 10},
            {"id": "p", "type": "regular_polygon", "n": 5.5, "side": 10},
            {"id": "g", "type": "polygon", "points": [[0, 0], [1, 1]]},
        ],
    )
    def test_invalid_parameters(self, data) -> None:
        with pytest.raises(InvalidParameter):
            shape_def_from_dict(data)

    def test_not_an_object(self) -> None:
        with pytest.raises(MalformedDefinition):
            shape_def_from_dict(["circle"])

    def test_to_dict_round_trip(self) -> None:
        original = ParallelogramDef("pg", 40, 20, -5, label_en="Slanted")
        assert shape_def_from_dict(original.to_dict()) == original

    def test_inline_group_key_from_parameters(self) -> None:
        assert RectDef(None, 30, 20).group_key == RectDef(None, 30, 20).group_key
        assert RectDef(None, 30, 20).group_key != RectDef(None, 20, 30).group_key


class TestLabels:
    @pytest.mark.parametrize(
        ("shape", "expected"),
        [
            (CircleDef("c", 30), "Circle (diameter 30 mm)"),
            (RectDef("s", 30, 30), "Square (side 30 mm)"),
            (RectDef("r", 30, 60), "Rectangle (30×60 mm)"),
            (RegularPolygonDef("h", 6, 20), "Regular hexagon (side 20 mm)"),
            (RegularPolygonDef("h", 7, 20), "Regular 7-gon (side 20 mm)"),
            (EquilateralTriangleDef("e", 30), "Equilateral triangle (side 30 mm)"),
            (RightTriangleDef("t", 30, 40.5), "Right triangle (legs 30×40.5 mm)"),
        ],
    )
    def test_dimension_label(self, shape, expected) -> None:
        assert dimension_label(shape) == expected

    def test_custom_label_first(self) -> None:
        shape = RectDef("s", 30, 30, label_en="Square")
        assert shape_label_lines(shape, "en") == ["Square", "Square (side 30 mm)"]

    def test_no_custom_label(self) -> None:
        assert shape_label_lines(CircleDef("c", 20), "zh") == ["Circle (diameter 20 mm)"]


class TestShapeCatalog:
    def test_bundled_catalog(self, catalog: ShapeCatalog) -> None:
        assert "circle_d30" in catalog
        assert catalog.get("square_30") == RectDef("square_30", 30, 30, label_en="Square", label_zh="正方形")
        for shape in catalog:
            assert resolve(shape).is_ccw

    def test_unknown_reference(self, catalog: ShapeCatalog) -> None:
        with pytest.raises(UnknownShapeReference) as info:
            catalog.get("nope")
        assert info.value.shape_id == "nope"

    def test_duplicate_id_rejected(self) -> None:
        with pytest.raises(MalformedDefinition):
            ShapeCatalog([CircleDef("c", 10), CircleDef("c", 20)])

    def test_from_dict_preserves_order(self) -> None:
        catalog = ShapeCatalog.from_dict(
            {"shapes": [{"id": "b", "type": "circle", "d": 10}, {"id": "a", "type": "rect", "w": 1, "h": 2}]}
        )
        assert catalog.ids == ["b", "a"]
        assert len(catalog) == 2
