"""Polygon generators for tests and benchmarks.

Every generator returns an (N, 2) float64 array of a simple polygon in
clockwise order (y-down frame, positive shoelace area), ready for
``triangulate``.
"""
from __future__ import annotations

from typing import Optional, Union

import numpy as np
from scipy.spatial import ConvexHull

from .constants import DEFAULT_NOISE
from .errors import InvalidInputError

__all__ = ['regular_polygon', 'random_star_polygon', 'random_convex_polygon', 'comb_polygon']

SeedLike = Union[int, np.random.Generator, None]


def _rng(seed: SeedLike) -> np.random.Generator:
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def _check_n(n: int, minimum: int = 3) -> int:
    n = int(n)
    if n < minimum:
        raise InvalidInputError(f"needs at least {minimum} vertices, {n} requested")
    return n


def regular_polygon(n: int, radius: float = 1.0, center=(0.0, 0.0)) -> np.ndarray:
    n = _check_n(n)
    angles = np.linspace(0.0, 2.0 * np.pi, n, endpoint=False)
    return np.column_stack([center[0] + radius * np.cos(angles), center[1] + radius * np.sin(angles)])


def random_star_polygon(n: int, noise: float = DEFAULT_NOISE, seed: SeedLike = None) -> np.ndarray:
    """Points on the unit circle at evenly spaced angles with radial noise.

    Star-shaped around the origin, hence always simple; ``noise`` in [0, 1)
    controls how many corners turn reflex.
    """
    n = _check_n(n)
    if not 0.0 <= noise < 1.0:
        raise InvalidInputError(f"noise must be in [0, 1), got {noise}")
    rng = _rng(seed)
    angles = np.linspace(0.0, 2.0 * np.pi, n, endpoint=False)
    radii = 1.0 + rng.uniform(-noise, noise, size=n)
    return np.column_stack([radii * np.cos(angles), radii * np.sin(angles)])


def random_convex_polygon(n: int, seed: SeedLike = None, max_tries: int = 50) -> np.ndarray:
    """Convex hull of random points, sampled until the hull has ``n`` vertices.

    Hull vertices come back counter-clockwise in the y-up sense, which is
    clockwise in the y-down frame used by the triangulators.
    """
    n = _check_n(n)
    rng = _rng(seed)
    for _ in range(max_tries):
        # points on a circle are all extreme unless two nearly coincide
        angles = rng.uniform(0.0, 2.0 * np.pi, size=n)
        pts = np.column_stack([np.cos(angles), np.sin(angles)])
        hull = ConvexHull(pts)
        if hull.vertices.shape[0] == n:
            return np.ascontiguousarray(pts[hull.vertices])
    raise RuntimeError(f"could not sample a convex polygon with {n} vertices in {max_tries} tries")


def comb_polygon(teeth: int, width: float = 1.0, height: float = 2.0) -> np.ndarray:
    """Comb with ``teeth`` triangular teeth; every valley between two teeth is reflex.

    Has ``2 * teeth + 3`` vertices.
    """
    teeth = _check_n(teeth, minimum=1)
    top = []
    for i in range(teeth, 0, -1):
        top.append((2.0 * i * width, 1.0))
        top.append(((2.0 * i - 1.0) * width, 1.0 + height))
    top.append((0.0, 1.0))
    pts = [(0.0, 0.0), (2.0 * teeth * width, 0.0)] + top
    return np.asarray(pts, dtype=np.float64)
