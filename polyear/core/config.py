"""Configuration objects for polyear triangulation and the benchmark harness."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .constants import DEFAULT_NOISE
from .errors import InvalidInputError


class TriangulationMethod(str, enum.Enum):
    """Ear-clipping variant; plain strings 'naive' / 'optimized' are accepted too."""
    NAIVE = 'naive'
    OPTIMIZED = 'optimized'

    @classmethod
    def coerce(cls, value: Union['TriangulationMethod', str]) -> 'TriangulationMethod':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ', '.join(m.value for m in cls)
            raise InvalidInputError(f"unknown triangulation method {value!r} (choose from {choices})") from None


@dataclass
class TriangulationConfig:
    """Per-call options for ``triangulate``.

    Attributes
    ----------
    method : TriangulationMethod
        Algorithm used when the call does not name one.
    validate_input : bool
        Run ``validate_polygon`` first and raise InvalidInputError on failure.
    normalize_winding : bool
        Reverse counter-clockwise input so it is clockwise before clipping.
        Triangle indices still refer to the caller's original order.
    log_level : str or int, optional
        Level for the 'polyear.triangulation' logger for the duration of the call.
    """
    method: TriangulationMethod = TriangulationMethod.NAIVE
    validate_input: bool = False
    normalize_winding: bool = False
    log_level: Optional[Union[str, int]] = None

    def __post_init__(self):
        self.method = TriangulationMethod.coerce(self.method)


@dataclass
class BenchmarkConfig:
    sizes: Tuple[int, ...] = (10, 20, 50, 100, 200)
    repeats: int = 3
    seed: int = 0
    noise: float = DEFAULT_NOISE
    methods: Tuple[TriangulationMethod, ...] = field(
        default_factory=lambda: (TriangulationMethod.NAIVE, TriangulationMethod.OPTIMIZED))

    def __post_init__(self):
        self.methods = tuple(TriangulationMethod.coerce(m) for m in self.methods)
        if any(int(n) < 3 for n in self.sizes):
            raise InvalidInputError(f"benchmark sizes must be >= 3, got {self.sizes}")
        if self.repeats < 1:
            raise InvalidInputError(f"repeats must be >= 1, got {self.repeats}")


__all__ = ['TriangulationMethod', 'TriangulationConfig', 'BenchmarkConfig']
