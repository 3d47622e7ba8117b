"""Central numerical tolerances for curve, hull and polygon routines.

Tiny thresholds live here so they can be tuned consistently and referenced
without scattering literals across the engines.
"""
from __future__ import annotations

# Point comparison
EPS_DUPLICATE: float = 1e-6       # default tolerance for adjacent-duplicate collapsing

# Segment / plane tests
EPS_PLANE: float = 1e-12          # |direction . normal| below this means parallel to the plane
EPS_LENGTH: float = 1e-12         # segments shorter than this are treated as points

# Auxiliary small epsilons
EPS_COLINEAR: float = 1e-15       # near-colinearity threshold for hull chord tests

__all__ = [
    'EPS_DUPLICATE',
    'EPS_PLANE',
    'EPS_LENGTH',
    'EPS_COLINEAR',
]
