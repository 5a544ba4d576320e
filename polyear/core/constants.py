"""Central numerical tolerances and small geometry constants.

This module centralizes tiny numeric thresholds used across the codebase so
they can be tuned consistently and referenced without scattering literals.
"""
from __future__ import annotations

import sys

_EPS: float = sys.float_info.epsilon * 0.5   # unit roundoff of float64

# Static error bound for the float orientation filter. If |det| exceeds
# ORIENT_ERRBOUND * (|detleft| + |detright|) the float sign is certain.
ORIENT_ERRBOUND: float = (3.0 + 16.0 * _EPS) * _EPS

# Validation / comparison tolerances
EPS_AREA: float = 1e-12           # minimum positive (absolute) polygon area
EPS_REL_AREA: float = 1e-9        # relative tolerance for area sums

# Generators
DEFAULT_NOISE: float = 0.3        # radial noise amplitude for star polygons

__all__ = [
    'ORIENT_ERRBOUND',
    'EPS_AREA',
    'EPS_REL_AREA',
    'DEFAULT_NOISE',
]
