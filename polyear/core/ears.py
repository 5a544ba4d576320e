"""Ear classification.

A vertex is an ear tip when its corner is convex and the triangle it forms
with its two neighbours contains none of the candidate points. By the
two-ears theorem only reflex vertices can fall inside such a triangle, so a
caller may pass the reflex set alone as ``candidates``.
"""
from __future__ import annotations

from typing import Iterable, Optional

from .geometry import is_convex_angle, point_in_triangle
from .stats import TriangulationStats

__all__ = ['is_ear']


def _same(p, q) -> bool:
    return p[0] == q[0] and p[1] == q[1]


def is_ear(prev, vertex, nxt, candidates: Iterable, stats: Optional[TriangulationStats] = None) -> bool:
    if stats is not None:
        stats.ear_tests += 1
    if not is_convex_angle(prev, vertex, nxt):
        return False
    for p in candidates:
        if _same(p, prev) or _same(p, vertex) or _same(p, nxt):
            continue
        if stats is not None:
            stats.point_tests += 1
        if point_in_triangle(p, prev, vertex, nxt):
            return False
    return True
