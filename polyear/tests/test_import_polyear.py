"""Smoke test to ensure top-level package import works without triggering
circular import errors. This guards against regressions in the flat API
layer (`polyear/__init__.py`).
"""
import sys


def test_import_polyear_smoke():
    import polyear  # noqa: F401
    # A couple of light sanity checks on expected public symbols
    assert hasattr(polyear, 'triangulate')
    assert hasattr(polyear, 'NoEarFoundError')
    assert polyear.TriangulationMethod.OPTIMIZED.value == 'optimized'


def test_flat_api_triangulates():
    import polyear
    tris = polyear.triangulate([(0, 0), (4, 0), (4, 4), (0, 4)], polyear.TriangulationMethod.OPTIMIZED)
    assert len(tris) == 2


def test_visualization_proxy_resolves():
    import polyear
    assert callable(polyear.visualization.plot_triangulation)  # lazy proxy should resolve
    assert 'polyear.core.visualization' in sys.modules
