"""Public package API for the polyear triangulation toolkit.

This facade provides a stable, flat import surface on top of the internal
implementation package ``polyear.core`` while deferring matplotlib (plotting)
until first use to keep ``import polyear`` fast.

Example
-------
    from polyear import triangulate, TriangulationMethod

    triangulate([(0, 0), (4, 0), (4, 4), (0, 4)], TriangulationMethod.OPTIMIZED)

The deeper modules (``polyear.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotInstalled
    __version__ = _pkg_version("polyear")  # populated when installed
except _NotInstalled:  # pragma: no cover - source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Eager light-weight submodules
_const = _imp('polyear.core.constants')
_errors = _imp('polyear.core.errors')
_geom = _imp('polyear.core.geometry')
_boundary = _imp('polyear.core.boundary')
_ears = _imp('polyear.core.ears')
_tri = _imp('polyear.core.triangulation')
_config = _imp('polyear.core.config')
_stats = _imp('polyear.core.stats')
_validation = _imp('polyear.core.validation')
_generators = _imp('polyear.core.generators')
_halfedge = _imp('polyear.core.halfedge')
_log = _imp('polyear.core.logging_utils')


def _lazy_module(mod_name):
    class _ModuleProxy:
        __slots__ = ('_m',)
        def _load(self):
            try:
                return object.__getattribute__(self, '_m')
            except AttributeError:
                self._m = _imp(mod_name)
                return self._m
        def __getattr__(self, item):
            if item == '_m':
                raise AttributeError(item)
            return getattr(self._load(), item)
        def __dir__(self):
            return dir(self._load())
    return _ModuleProxy()


# Lazily loaded matplotlib-dependent module
visualization = _lazy_module('polyear.core.visualization')


def plot_triangulation(*args, **kwargs):
    return visualization.plot_triangulation(*args, **kwargs)


# Entry points
triangulate = _tri.triangulate
triangulate_indices = _tri.triangulate_indices
get_strategy = _tri.get_strategy
NaiveEarClipping = _tri.NaiveEarClipping
OptimizedEarClipping = _tri.OptimizedEarClipping
EarClippingStrategy = _tri.EarClippingStrategy
TriangulationMethod = _config.TriangulationMethod
TriangulationConfig = _config.TriangulationConfig
BenchmarkConfig = _config.BenchmarkConfig
TriangulationStats = _stats.TriangulationStats
format_stats_table = _stats.format_stats_table

# Errors
TriangulationError = _errors.TriangulationError
InvalidInputError = _errors.InvalidInputError
DegenerateGeometryError = _errors.DegenerateGeometryError
NoEarFoundError = _errors.NoEarFoundError

# Predicates and structures
Orientation = _geom.Orientation
orientation = _geom.orientation
is_convex_angle = _geom.is_convex_angle
point_in_triangle = _geom.point_in_triangle
polygon_signed_area = _geom.polygon_signed_area
triangle_signed_area = _geom.triangle_signed_area
is_ear = _ears.is_ear
CircularBoundary = _boundary.CircularBoundary
ConvexReflexPartition = _boundary.ConvexReflexPartition
HalfEdgeMesh = _halfedge.HalfEdgeMesh

# Collaborators
Winding = _validation.Winding
polygon_winding = _validation.polygon_winding
orient_clockwise = _validation.orient_clockwise
validate_polygon = _validation.validate_polygon
is_simple_polygon = _validation.is_simple_polygon
polygon_has_self_intersections = _validation.polygon_has_self_intersections
random_star_polygon = _generators.random_star_polygon
random_convex_polygon = _generators.random_convex_polygon
comb_polygon = _generators.comb_polygon
regular_polygon = _generators.regular_polygon
configure_logging = _log.configure_logging
get_logger = _log.get_logger

# Namespace submodules for exploratory users
geometry = _geom
boundary = _boundary
ears = _ears
triangulation = _tri
config = _config
stats = _stats
validation = _validation
generators = _generators
halfedge = _halfedge
constants = _const
errors = _errors

__all__ = [
    '__version__',
    # entry points
    'triangulate', 'triangulate_indices', 'get_strategy',
    'NaiveEarClipping', 'OptimizedEarClipping', 'EarClippingStrategy',
    'TriangulationMethod', 'TriangulationConfig', 'BenchmarkConfig',
    'TriangulationStats', 'format_stats_table',
    # errors
    'TriangulationError', 'InvalidInputError', 'DegenerateGeometryError', 'NoEarFoundError',
    # predicates / structures
    'Orientation', 'orientation', 'is_convex_angle', 'point_in_triangle',
    'polygon_signed_area', 'triangle_signed_area', 'is_ear',
    'CircularBoundary', 'ConvexReflexPartition', 'HalfEdgeMesh',
    # collaborators
    'Winding', 'polygon_winding', 'orient_clockwise', 'validate_polygon', 'is_simple_polygon',
    'polygon_has_self_intersections', 'random_star_polygon', 'random_convex_polygon',
    'comb_polygon', 'regular_polygon', 'plot_triangulation', 'configure_logging', 'get_logger',
    # submodules
    'geometry', 'boundary', 'ears', 'triangulation', 'config', 'stats', 'validation',
    'generators', 'halfedge', 'constants', 'errors', 'visualization',
]
