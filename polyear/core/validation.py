"""Polygon validity checks run by callers before triangulating.

The triangulation core assumes a simple clockwise polygon; these helpers let
a caller verify that (and fix the winding) when input provenance is
untrusted. Self-intersection tests are vectorized per edge with numpy.
"""
from __future__ import annotations

import enum
from typing import List, Tuple

import numpy as np

from .constants import EPS_AREA
from .errors import InvalidInputError
from .geometry import Orientation, as_point_array, orientation, polygon_signed_area

__all__ = [
    'Winding', 'polygon_winding', 'orient_clockwise', 'segments_intersect',
    'polygon_has_self_intersections', 'validate_polygon', 'is_simple_polygon',
]


class Winding(enum.Enum):
    CLOCKWISE = 'clockwise'
    COUNTER_CLOCKWISE = 'counter-clockwise'
    DEGENERATE = 'degenerate'


def polygon_winding(polygon) -> Winding:
    """Winding in the y-down frame: positive shoelace area is clockwise."""
    area = polygon_signed_area(as_point_array(polygon))
    if area > 0:
        return Winding.CLOCKWISE
    if area < 0:
        return Winding.COUNTER_CLOCKWISE
    return Winding.DEGENERATE


def orient_clockwise(polygon) -> Tuple[np.ndarray, bool]:
    """Return (points, reversed_flag) with the points in clockwise order."""
    pts = as_point_array(polygon)
    if polygon_winding(pts) is Winding.COUNTER_CLOCKWISE:
        return np.ascontiguousarray(pts[::-1]), True
    return pts, False


def _on_segment(p, q, r) -> bool:
    """r is collinear with pq; True if it lies within pq's bounding box."""
    return (min(p[0], q[0]) <= r[0] <= max(p[0], q[0])
            and min(p[1], q[1]) <= r[1] <= max(p[1], q[1]))


def segments_intersect(p1, p2, q1, q2) -> bool:
    """Closed segment intersection (touching and collinear overlap count)."""
    o1 = orientation(p1, p2, q1); o2 = orientation(p1, p2, q2)
    o3 = orientation(q1, q2, p1); o4 = orientation(q1, q2, p2)
    if o1 != o2 and o3 != o4 and 0 not in (o1, o2, o3, o4):
        return True
    if o1 is Orientation.COLLINEAR and _on_segment(p1, p2, q1): return True
    if o2 is Orientation.COLLINEAR and _on_segment(p1, p2, q2): return True
    if o3 is Orientation.COLLINEAR and _on_segment(q1, q2, p1): return True
    if o4 is Orientation.COLLINEAR and _on_segment(q1, q2, p2): return True
    return False


def _orient_many(a, b, c):
    """Float cross(b - a, c - a) of one segment ab against many points c (M,2)."""
    return (b[0] - a[0]) * (c[:, 1] - a[1]) - (b[1] - a[1]) * (c[:, 0] - a[0])


def _candidate_pairs(pts: np.ndarray) -> List[Tuple[int, int]]:
    """Non-adjacent edge pairs (i, j), i < j, whose float tests say they may meet.

    The float screen is conservative (near-zero orientations are kept), the
    exact predicate makes the final call.
    """
    n = pts.shape[0]
    starts = pts
    ends = np.roll(pts, -1, axis=0)
    lo = np.minimum(starts, ends); hi = np.maximum(starts, ends)
    scale = float(np.max(np.abs(pts))) or 1.0
    tol = EPS_AREA * scale * scale
    pairs = []
    for i in range(n - 2):
        j = np.arange(i + 2, n)
        if i == 0:
            j = j[j != n - 1]
        if j.size == 0:
            continue
        box = ~((hi[j, 0] < lo[i, 0]) | (hi[i, 0] < lo[j, 0]) | (hi[j, 1] < lo[i, 1]) | (hi[i, 1] < lo[j, 1]))
        j = j[box]
        if j.size == 0:
            continue
        o1 = _orient_many(starts[i], ends[i], starts[j]); o2 = _orient_many(starts[i], ends[i], ends[j])
        keep = ~((o1 > tol) & (o2 > tol)) & ~((o1 < -tol) & (o2 < -tol))
        pairs.extend((i, int(k)) for k in j[keep])
    return pairs


def polygon_has_self_intersections(polygon) -> bool:
    """Return True if any two non-adjacent edges touch or cross."""
    pts = as_point_array(polygon)
    n = pts.shape[0]
    if n < 4:
        return False
    xy = [tuple(p) for p in pts.tolist()]
    for i, j in _candidate_pairs(pts):
        if segments_intersect(xy[i], xy[(i + 1) % n], xy[j], xy[(j + 1) % n]):
            return True
    return False


def validate_polygon(polygon) -> Tuple[bool, List[str]]:
    """Check that ``polygon`` is a simple polygon usable by the triangulators.

    Returns (ok, messages). Checks: coercible to >= 3 finite points, no
    repeated vertices, non-zero area, no spikes (an edge folding back over
    its neighbour), no touching or crossing non-adjacent edges.
    """
    msgs: List[str] = []
    try:
        pts = as_point_array(polygon)
    except InvalidInputError as e:
        return False, [str(e)]
    n = pts.shape[0]
    uniq = np.unique(pts, axis=0)
    if uniq.shape[0] != n:
        msgs.append(f"{n - uniq.shape[0]} repeated vertices")
    if abs(polygon_signed_area(pts)) <= EPS_AREA:
        msgs.append("polygon has zero area")
    xy = [tuple(p) for p in pts.tolist()]
    for k in range(n):
        a, v, b = xy[k - 1], xy[k], xy[(k + 1) % n]
        if orientation(a, v, b) is Orientation.COLLINEAR:
            # collinear corner is fine unless both neighbours lie on the same ray
            if (a[0] - v[0]) * (b[0] - v[0]) + (a[1] - v[1]) * (b[1] - v[1]) > 0:
                msgs.append(f"spike at vertex {k}")
    if polygon_has_self_intersections(pts):
        msgs.append("polygon edges intersect")
    return (not msgs), msgs


def is_simple_polygon(polygon) -> bool:
    ok, _ = validate_polygon(polygon)
    return ok
