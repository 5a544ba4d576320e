"""Ear-clipping triangulation of simple polygons.

Two strategies share one interface (``EarClippingStrategy.triangulate_indices``):

- ``NaiveEarClipping`` scans the whole boundary for an ear and tests each
  candidate against every other boundary vertex. O(n^3).
- ``OptimizedEarClipping`` partitions the vertices into convex and reflex sets
  once, tests ears only against the reflex set, and after each clip only
  reclassifies the two neighbours of the removed tip. O(n^2).

Input is an ordered sequence of (x, y) points in clockwise winding (y-down
frame, i.e. positive shoelace area). Triangles keep that winding.
"""
from __future__ import annotations

import time
from typing import List, Optional, Tuple, Union

import numpy as np

from .boundary import CircularBoundary, ConvexReflexPartition
from .config import TriangulationConfig, TriangulationMethod
from .ears import is_ear
from .errors import DegenerateGeometryError, InvalidInputError, NoEarFoundError
from .geometry import Orientation, as_point_array, is_convex_angle, orientation
from .logging_utils import get_logger, log_level
from .stats import TriangulationStats
from .validation import orient_clockwise, validate_polygon

logger = get_logger('polyear.triangulation')

Triangle = Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]

__all__ = [
    'Triangle',
    'TriangulationMethod',
    'EarClippingStrategy',
    'NaiveEarClipping',
    'OptimizedEarClipping',
    'get_strategy',
    'triangulate',
    'triangulate_indices',
]


class EarClippingStrategy:
    """Base class for ear-clipping variants.

    Subclasses implement ``_clip_all`` which consumes a freshly built
    boundary down to three vertices and returns the clipped ears as handle
    triples. Handles are input indices, so the result maps straight back to
    the caller's points.
    """

    method: TriangulationMethod

    def triangulate_indices(self, points, stats: Optional[TriangulationStats] = None) -> np.ndarray:
        """Triangulate ``points`` and return an (n-2, 3) int array of input indices."""
        t0 = time.perf_counter()
        boundary = CircularBoundary.build(points)
        if stats is not None:
            stats.method = self.method.value
            stats.vertices = boundary.size
        tris = self._clip_all(boundary, stats)
        tris.append(_final_triangle(boundary))
        if stats is not None:
            stats.time_total += time.perf_counter() - t0
        logger.debug("%s: %d vertices -> %d triangles", self.method.value, boundary.capacity, len(tris))
        return np.asarray(tris, dtype=np.int64).reshape(-1, 3)

    def _clip_all(self, boundary: CircularBoundary, stats: Optional[TriangulationStats]) -> List[Tuple[int, int, int]]:
        raise NotImplementedError("Subclasses must implement _clip_all")


def _final_triangle(boundary: CircularBoundary) -> Tuple[int, int, int]:
    a = boundary.head
    b = boundary.next(a)
    c = boundary.next(b)
    if orientation(boundary.point(a), boundary.point(b), boundary.point(c)) is Orientation.COLLINEAR:
        raise DegenerateGeometryError(
            f"remaining vertices {boundary.point(a)}, {boundary.point(b)}, {boundary.point(c)} "
            "are collinear and do not form a triangle")
    return a, b, c


def _no_ear(method: str, remaining: int) -> NoEarFoundError:
    logger.warning("%s: no ear found with %d vertices left; polygon is not simple, "
                   "degenerate or counter-clockwise", method, remaining)
    return NoEarFoundError(f"no ear found with {remaining} vertices remaining - polygon may be invalid",
                           remaining=remaining)


class NaiveEarClipping(EarClippingStrategy):
    """Scan from head for any ear, testing against all other boundary points."""

    method = TriangulationMethod.NAIVE

    def _clip_all(self, boundary, stats):
        tris = []
        cursor = boundary.head
        misses = 0
        while boundary.size > 3:
            p = boundary.prev(cursor); n = boundary.next(cursor)
            # lazy: only walked when the corner is convex
            others = (boundary.point(h) for h in boundary.vertices_around(n) if h not in (p, cursor, n))
            if stats is not None:
                stats.scan_steps += 1
            if is_ear(boundary.point(p), boundary.point(cursor), boundary.point(n), others, stats):
                tris.append((p, cursor, n))
                logger.debug("clip ear %d (%d, %d, %d), %d left", cursor, p, cursor, n, boundary.size - 1)
                boundary.delete(cursor)
                if stats is not None:
                    stats.ears_clipped += 1
                cursor = boundary.head
                misses = 0
            else:
                misses += 1
                if misses >= boundary.size:
                    raise _no_ear(self.method.value, boundary.size)
                cursor = n
        return tris


class OptimizedEarClipping(EarClippingStrategy):
    """Convex/reflex partition with reflex-only ear tests and local updates."""

    method = TriangulationMethod.OPTIMIZED

    def _update_ear(self, boundary, partition, h, stats):
        if not boundary.is_convex[h]:
            boundary.is_ear[h] = False
            return
        p = boundary.prev(h); n = boundary.next(h)
        boundary.is_ear[h] = is_ear(boundary.point(p), boundary.point(h), boundary.point(n),
                                    partition.reflex_points(), stats)

    def _reclassify(self, boundary, partition, h, stats):
        p = boundary.prev(h); n = boundary.next(h)
        convex = is_convex_angle(boundary.point(p), boundary.point(h), boundary.point(n))
        if partition.assign(h, convex):
            if stats is not None:
                stats.reclassified += 1
            logger.debug("vertex %d is now %s", h, 'convex' if convex else 'reflex')

    def _clip_all(self, boundary, stats):
        partition = ConvexReflexPartition(boundary)
        for h in boundary.vertices_around():
            p = boundary.prev(h); n = boundary.next(h)
            partition.assign(h, is_convex_angle(boundary.point(p), boundary.point(h), boundary.point(n)))
        for h in partition.convex:
            self._update_ear(boundary, partition, h, stats)
        logger.debug("initial partition: %d convex, %d reflex", len(partition.convex), len(partition.reflex))

        tris = []
        while boundary.size > 3:
            tip = None
            for h in partition.convex:
                if stats is not None:
                    stats.scan_steps += 1
                if boundary.is_ear[h]:
                    tip = h
                    break
            if tip is None:
                raise _no_ear(self.method.value, boundary.size)
            p = boundary.prev(tip); n = boundary.next(tip)
            tris.append((p, tip, n))
            partition.remove(tip)
            if stats is not None:
                stats.ears_clipped += 1
            logger.debug("clip ear %d (%d, %d, %d), %d left", tip, p, tip, n, boundary.size)
            # reclassify both neighbours before re-testing ears so the reflex
            # set is current for either test
            self._reclassify(boundary, partition, p, stats)
            self._reclassify(boundary, partition, n, stats)
            self._update_ear(boundary, partition, p, stats)
            self._update_ear(boundary, partition, n, stats)
        return tris


_STRATEGIES = {
    TriangulationMethod.NAIVE: NaiveEarClipping,
    TriangulationMethod.OPTIMIZED: OptimizedEarClipping,
}


def get_strategy(method: Union[TriangulationMethod, str] = TriangulationMethod.NAIVE) -> EarClippingStrategy:
    return _STRATEGIES[TriangulationMethod.coerce(method)]()


def triangulate_indices(polygon, method: Union[TriangulationMethod, str, None] = None, *,
                        config: Optional[TriangulationConfig] = None,
                        stats: Optional[TriangulationStats] = None) -> np.ndarray:
    """Triangulate a clockwise simple polygon; return an (n-2, 3) array of input indices.

    Raises
    ------
    InvalidInputError
        Fewer than 3 points, malformed input, or (with ``validate_input``) a
        polygon that fails validation.
    DegenerateGeometryError
        A triangle that would be emitted is collinear.
    NoEarFoundError
        No ear exists while more than 3 vertices remain.
    """
    cfg = config or TriangulationConfig()
    strategy = get_strategy(cfg.method if method is None else method)
    with log_level(logger, cfg.log_level):
        pts = as_point_array(polygon)
        if cfg.validate_input:
            ok, msgs = validate_polygon(pts)
            if not ok:
                raise InvalidInputError("polygon failed validation: " + "; ".join(msgs))
        flipped = False
        if cfg.normalize_winding:
            pts, flipped = orient_clockwise(pts)
            if flipped:
                logger.debug("reversed counter-clockwise input")
        idx = strategy.triangulate_indices(pts, stats)
        if flipped:
            idx = (pts.shape[0] - 1) - idx
        return idx


def triangulate(polygon, method: Union[TriangulationMethod, str, None] = None, *,
                config: Optional[TriangulationConfig] = None,
                stats: Optional[TriangulationStats] = None) -> List[Triangle]:
    """Triangulate a clockwise simple polygon by ear clipping.

    Returns a list of ``n - 2`` triangles, each a tuple of three ``(x, y)``
    float tuples copied from the input. ``method`` defaults to the config's
    method (naive unless configured otherwise). See ``triangulate_indices``
    for the errors raised.
    """
    pts = as_point_array(polygon)
    idx = triangulate_indices(pts, method, config=config, stats=stats)
    xy = [tuple(p) for p in pts.tolist()]
    return [(xy[a], xy[b], xy[c]) for a, b, c in idx.tolist()]
