"""Geometric predicates and area helpers.

Coordinates are read in a y-down (screen) frame. In that frame a polygon
listed clockwise on screen has a positive shoelace sum in raw numbers, and a
convex corner of a clockwise polygon is a counter-clockwise turn from the ray
towards the previous vertex to the ray towards the next one.

The orientation predicate is exact: a float evaluation is accepted when a
static error bound certifies its sign, otherwise the determinant is
recomputed with rational arithmetic.
"""
from __future__ import annotations

import enum
from fractions import Fraction
from typing import Sequence, Tuple

import numpy as np

from .constants import ORIENT_ERRBOUND
from .errors import DegenerateGeometryError, InvalidInputError

Point = Tuple[float, float]

__all__ = [
    'Point', 'Orientation', 'orientation', 'is_convex_angle', 'point_in_triangle',
    'triangle_signed_area', 'polygon_signed_area', 'triangles_signed_areas',
    'as_point_array',
]


class Orientation(enum.IntEnum):
    CCW = 1
    CW = -1
    COLLINEAR = 0


def _exact_cross(p1, p2, p3) -> int:
    ax = Fraction(p1[0]) - Fraction(p2[0]); ay = Fraction(p1[1]) - Fraction(p2[1])
    bx = Fraction(p3[0]) - Fraction(p2[0]); by = Fraction(p3[1]) - Fraction(p2[1])
    det = ax * by - ay * bx
    return (det > 0) - (det < 0)


def orientation(p1, p2, p3) -> Orientation:
    """Turn direction at p2 going from the ray p2->p1 to the ray p2->p3.

    Sign of cross(p1 - p2, p3 - p2); a negative cross product is a
    counter-clockwise turn in the y-down frame.
    """
    detleft = (p1[0] - p2[0]) * (p3[1] - p2[1])
    detright = (p1[1] - p2[1]) * (p3[0] - p2[0])
    det = detleft - detright
    bound = ORIENT_ERRBOUND * (abs(detleft) + abs(detright))
    if det > bound:
        sign = 1
    elif det < -bound:
        sign = -1
    else:
        sign = _exact_cross(p1, p2, p3)
    if sign < 0:
        return Orientation.CCW
    if sign > 0:
        return Orientation.CW
    return Orientation.COLLINEAR


def is_convex_angle(prev, vertex, nxt) -> bool:
    """True iff the interior angle at `vertex` is below 180 degrees (clockwise polygon)."""
    return orientation(prev, vertex, nxt) is Orientation.CCW


def _same_point(p, q) -> bool:
    return p[0] == q[0] and p[1] == q[1]


def point_in_triangle(point, a, b, c) -> bool:
    """Closed containment test: vertices and edges count as inside.

    Raises DegenerateGeometryError when a, b, c are collinear.
    """
    if orientation(a, b, c) is Orientation.COLLINEAR:
        raise DegenerateGeometryError(
            f"points {tuple(a)}, {tuple(b)}, {tuple(c)} are collinear and do not form a triangle")
    if _same_point(point, a) or _same_point(point, b) or _same_point(point, c):
        return True
    o1 = orientation(point, a, b)
    o2 = orientation(point, b, c)
    o3 = orientation(point, c, a)
    if o1 == o2 == o3:
        return True
    zeros = (o1 == 0) + (o2 == 0) + (o3 == 0)
    if zeros == 1:
        # on an edge: the two remaining sides must agree
        others = [o for o in (o1, o2, o3) if o != 0]
        return others[0] == others[1]
    return False


def triangle_signed_area(a, b, c) -> float:
    """Shoelace area of (a, b, c); positive for a clockwise (y-down) triangle."""
    return 0.5 * ((b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0]))


def polygon_signed_area(polygon) -> float:
    """Shoelace signed area of a polygon given as (N,2) array-like.

    Positive for clockwise winding in the y-down frame.
    """
    arr = np.asarray(polygon, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] < 3:
        return 0.0
    x = arr[:, 0]; y = arr[:, 1]
    return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def triangles_signed_areas(triangles) -> np.ndarray:
    """Vectorized signed area for a batch of coordinate triangles.

    triangles: (M,3,2) array-like of corner coordinates.
    Returns: (M,) float64 array.
    """
    T = np.asarray(triangles, dtype=np.float64)
    if T.size == 0:
        return np.empty((0,), dtype=np.float64)
    p0 = T[:, 0]; p1 = T[:, 1]; p2 = T[:, 2]
    d1 = p1 - p0; d2 = p2 - p0
    return 0.5 * (d1[:, 0] * d2[:, 1] - d1[:, 1] * d2[:, 0])


def as_point_array(polygon: Sequence) -> np.ndarray:
    """Coerce a polygon to a contiguous (N,2) float64 array of at least 3 finite points."""
    if polygon is None:
        raise InvalidInputError("polygon is None")
    try:
        arr = np.asarray(polygon, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"polygon is not a sequence of (x, y) points: {e}") from e
    if arr.ndim == 1 and arr.size == 0:
        arr = arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidInputError(f"expected an (N, 2) array of points, got shape {arr.shape}")
    if arr.shape[0] < 3:
        raise InvalidInputError(f"needs at least 3 vertices, {arr.shape[0]} provided")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError("polygon contains non-finite coordinates")
    return np.ascontiguousarray(arr)
