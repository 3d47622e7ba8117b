"""Configuration objects for curve and hull routines."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .constants import EPS_DUPLICATE, EPS_PLANE
from .exceptions import InvalidArgumentError


@dataclass(frozen=True)
class CurveConfig:
    """Default tolerances used by polyline operations when none is passed.

    Attributes
    ----------
    duplicate_tolerance : float
        Per-coordinate tolerance for ``remove_adjacent_duplicates``.
    plane_tolerance : float
        Parallelism tolerance for ``intersections_with``.
    """
    duplicate_tolerance: float = EPS_DUPLICATE
    plane_tolerance: float = EPS_PLANE

    def __post_init__(self):
        if self.duplicate_tolerance < 0 or self.plane_tolerance < 0:
            raise InvalidArgumentError(f"tolerances must be non-negative, got {self}")


@dataclass(frozen=True)
class HullConfig:
    """Convex hull preferences.

    - collinear_tolerance: when positive, hull vertices whose neighbours make
      a cross product within this tolerance are removed after the scan.
    """
    collinear_tolerance: float = 0.0

    def __post_init__(self):
        if self.collinear_tolerance < 0:
            raise InvalidArgumentError(
                f"collinear_tolerance must be non-negative, got {self.collinear_tolerance}")


@dataclass
class GeometryConfig:
    """Unified configuration.

    Attributes
    ----------
    curve : CurveConfig
        Tolerances for polyline operations.
    hull : HullConfig
        Parameters for convex hull construction.
    extras : dict
        Free-form dictionary for caller extensions.
    """
    curve: CurveConfig = field(default_factory=CurveConfig)
    hull: HullConfig = field(default_factory=HullConfig)
    extras: Dict[str, Any] = field(default_factory=dict)


DEFAULT_CURVE_CONFIG = CurveConfig()
DEFAULT_HULL_CONFIG = HullConfig()

__all__ = [
    'CurveConfig', 'HullConfig', 'GeometryConfig',
    'DEFAULT_CURVE_CONFIG', 'DEFAULT_HULL_CONFIG',
]
