"""Unit tests for the geometric predicates."""
import numpy as np
import pytest

from polyear.core.errors import DegenerateGeometryError, InvalidInputError
from polyear.core.geometry import (
    Orientation, as_point_array, is_convex_angle, orientation, point_in_triangle,
    polygon_signed_area, triangle_signed_area, triangles_signed_areas,
)


class TestOrientation:

    def test_convex_corner_of_clockwise_square_is_ccw(self):
        # corner (4,0) of the y-down clockwise square
        assert orientation((0, 0), (4, 0), (4, 4)) is Orientation.CCW

    def test_reversed_turn_is_cw(self):
        assert orientation((4, 4), (4, 0), (0, 0)) is Orientation.CW

    def test_collinear(self):
        assert orientation((0, 0), (1, 0), (2, 0)) is Orientation.COLLINEAR
        assert orientation((0, 0), (1, 1), (5, 5)) is Orientation.COLLINEAR

    def test_values_match_sign_convention(self):
        assert int(Orientation.CCW) == 1
        assert int(Orientation.CW) == -1
        assert int(Orientation.COLLINEAR) == 0

    def test_cyclic_rotation_preserves_orientation(self):
        a, b, c = (0.3, 0.1), (2.0, 0.7), (1.1, 3.2)
        o = orientation(a, b, c)
        assert orientation(b, c, a) is o
        assert orientation(c, a, b) is o

    def test_near_collinear_is_exact(self):
        # c is the float nearest to the line through a and b but not on it
        a = (0.5, 0.5)
        b = (12.0, 12.0)
        c = (24.0, np.nextafter(24.0, 25.0))
        assert orientation(a, b, c) is not Orientation.COLLINEAR
        assert orientation(a, b, (24.0, 24.0)) is Orientation.COLLINEAR

    def test_tiny_perturbations_give_consistent_signs(self):
        # points on a line y = x with ulp-sized shifts; sign must be antisymmetric
        base = 0.1
        for k in range(1, 20):
            p = (base * k, base * k)
            q = (np.nextafter(p[0], 10.0), p[1])
            o1 = orientation((0.0, 0.0), (1.0, 1.0), q)
            o2 = orientation((1.0, 1.0), (0.0, 0.0), q)
            assert int(o1) == -int(o2)

    def test_accepts_numpy_rows(self):
        pts = np.array([[0.0, 0.0], [4.0, 0.0], [4.0, 4.0]])
        assert orientation(pts[0], pts[1], pts[2]) is Orientation.CCW


class TestConvexAngle:

    def test_square_corners_are_convex(self, square):
        n = len(square)
        for i in range(n):
            assert is_convex_angle(square[i - 1], square[i], square[(i + 1) % n])

    def test_notch_is_reflex(self, arrow):
        assert not is_convex_angle(arrow[0], arrow[1], arrow[2])

    def test_straight_angle_is_not_convex(self):
        assert not is_convex_angle((0, 0), (1, 0), (2, 0))


class TestPointInTriangle:
    tri = ((0.0, 4.0), (0.0, 0.0), (4.0, 0.0))

    def test_interior(self):
        assert point_in_triangle((1.0, 1.0), *self.tri)

    def test_exterior(self):
        assert not point_in_triangle((4.0, 4.0), *self.tri)
        assert not point_in_triangle((-1.0, 1.0), *self.tri)

    def test_vertices_count_as_inside(self):
        for v in self.tri:
            assert point_in_triangle(v, *self.tri)

    def test_edge_points_count_as_inside(self):
        assert point_in_triangle((2.0, 2.0), *self.tri)   # hypotenuse
        assert point_in_triangle((0.0, 1.5), *self.tri)   # leg

    def test_on_edge_line_but_outside_segment(self):
        assert not point_in_triangle((5.0, -1.0), *self.tri)
        assert not point_in_triangle((0.0, 5.0), *self.tri)

    def test_independent_of_triangle_winding(self):
        a, b, c = self.tri
        assert point_in_triangle((1.0, 1.0), c, b, a)
        assert not point_in_triangle((4.0, 4.0), c, b, a)

    def test_collinear_triangle_raises(self):
        with pytest.raises(DegenerateGeometryError):
            point_in_triangle((0.5, 0.5), (0, 0), (1, 0), (2, 0))


class TestAreas:

    def test_polygon_signed_area_square(self, square):
        assert polygon_signed_area(square) == pytest.approx(16.0)
        assert polygon_signed_area(square[::-1]) == pytest.approx(-16.0)

    def test_polygon_signed_area_arrow(self, arrow):
        assert polygon_signed_area(arrow) == pytest.approx(14.0)

    def test_polygon_signed_area_too_small(self):
        assert polygon_signed_area([(0, 0), (1, 1)]) == 0.0

    def test_triangle_signed_area_sign_matches_polygon(self):
        assert triangle_signed_area((0, 0), (4, 0), (4, 4)) == pytest.approx(8.0)
        assert triangle_signed_area((4, 4), (4, 0), (0, 0)) == pytest.approx(-8.0)

    def test_triangles_signed_areas_batch(self):
        tris = [((0, 0), (4, 0), (4, 4)), ((4, 4), (0, 4), (0, 0))]
        areas = triangles_signed_areas(tris)
        assert areas.shape == (2,)
        assert np.allclose(areas, [8.0, 8.0])

    def test_triangles_signed_areas_empty(self):
        assert triangles_signed_areas([]).shape == (0,)


class TestAsPointArray:

    def test_roundtrip_shape(self, square):
        arr = as_point_array(square)
        assert arr.shape == (4, 2)
        assert arr.dtype == np.float64

    @pytest.mark.parametrize("bad", [
        None,
        [],
        [(0, 0), (1, 1)],
        [(0, 0, 0), (1, 1, 1), (2, 2, 2)],
        [(0, 0), (1, np.nan), (2, 2)],
        [(0, 0), (1, np.inf), (2, 2)],
        [(0, 0), (1,), (2, 2)],
        "abc",
    ])
    def test_rejects_malformed(self, bad):
        with pytest.raises(InvalidInputError):
            as_point_array(bad)
