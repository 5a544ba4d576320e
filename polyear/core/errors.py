"""Exception hierarchy for triangulation failures.

All errors are local to a single call: any of them aborts the whole
triangulation and no partial triangle list is returned.
"""
from __future__ import annotations


class TriangulationError(Exception):
    """Base class for every error raised by polyear."""


class InvalidInputError(TriangulationError, ValueError):
    """Malformed or too-small input, or a handle that is not in the boundary."""


class DegenerateGeometryError(TriangulationError, ValueError):
    """Three collinear points where a proper triangle was assumed."""


class NoEarFoundError(TriangulationError, RuntimeError):
    """The clipping loop exhausted its candidates without progress.

    Cannot happen for a genuinely simple clockwise polygon (two-ears theorem),
    so it signals non-simple, degenerate or counter-clockwise input.
    """

    def __init__(self, message: str, remaining: int = 0):
        super().__init__(message)
        self.remaining = remaining


__all__ = [
    'TriangulationError',
    'InvalidInputError',
    'DegenerateGeometryError',
    'NoEarFoundError',
]
