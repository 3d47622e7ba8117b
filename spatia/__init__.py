"""Public package API for the spatia geometry kernel.

This facade provides a stable, flat import surface on top of the internal
implementation package ``spatia.core``.

Example
-------
    from spatia import PolyLine3D, Point3D, convex_hull, is_point_in_polygon

The deeper modules (``spatia.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:  # Python 3.8+ runtime version export
    from importlib.metadata import version as _pkg_version
    __version__ = _pkg_version("spatia-geom")  # populated when installed
except Exception:  # pragma: no cover - editable / unknown state
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_const = _imp('spatia.core.constants')
_errors = _imp('spatia.core.exceptions')
_config = _imp('spatia.core.config')
_log = _imp('spatia.core.logging_utils')
_prim = _imp('spatia.core.primitives')
_polygon = _imp('spatia.core.polygon')
_hull = _imp('spatia.core.hull')
_curve = _imp('spatia.core.curve')

# Primitives
Point2D = _prim.Point2D
Point3D = _prim.Point3D
Vector2D = _prim.Vector2D
Vector3D = _prim.Vector3D
LineSegment2D = _prim.LineSegment2D
LineSegment3D = _prim.LineSegment3D
Plane = _prim.Plane
Ray3D = _prim.Ray3D

# Curves
PolyLine2D = _curve.PolyLine2D
PolyLine3D = _curve.PolyLine3D
polyline_length = _curve.polyline_length
point_at_fraction = _curve.point_at_fraction
point_at_length = _curve.point_at_length
closest_point_and_preceding_index = _curve.closest_point_and_preceding_index
closest_point_to = _curve.closest_point_to
split_at_point = _curve.split_at_point
remove_adjacent_duplicates = _curve.remove_adjacent_duplicates
intersections_with = _curve.intersections_with
resample = _curve.resample

# Hull and polygons
Polygon2D = _polygon.Polygon2D
is_point_in_polygon = _polygon.is_point_in_polygon
points_in_polygon = _polygon.points_in_polygon
convex_hull = _hull.convex_hull
convex_hull_indices = _hull.convex_hull_indices

# Errors
GeometryError = _errors.GeometryError
InvalidArgumentError = _errors.InvalidArgumentError
InvalidStateError = _errors.InvalidStateError
UnsupportedOperationError = _errors.UnsupportedOperationError

# Configuration and logging
CurveConfig = _config.CurveConfig
HullConfig = _config.HullConfig
GeometryConfig = _config.GeometryConfig
configure_logging = _log.configure_logging
get_logger = _log.get_logger

# Tolerances
EPS_DUPLICATE = _const.EPS_DUPLICATE
EPS_PLANE = _const.EPS_PLANE

# Namespace submodules for exploratory users
primitives = _prim
curve = _curve
hull = _hull
polygon = _polygon
constants = _const

__all__ = [
    '__version__',
    # primitives
    'Point2D', 'Point3D', 'Vector2D', 'Vector3D', 'LineSegment2D', 'LineSegment3D',
    'Plane', 'Ray3D',
    # curves
    'PolyLine2D', 'PolyLine3D', 'polyline_length', 'point_at_fraction', 'point_at_length',
    'closest_point_and_preceding_index', 'closest_point_to', 'split_at_point',
    'remove_adjacent_duplicates', 'intersections_with', 'resample',
    # hull / polygons
    'Polygon2D', 'is_point_in_polygon', 'points_in_polygon', 'convex_hull', 'convex_hull_indices',
    # errors
    'GeometryError', 'InvalidArgumentError', 'InvalidStateError', 'UnsupportedOperationError',
    # config / logging
    'CurveConfig', 'HullConfig', 'GeometryConfig', 'configure_logging', 'get_logger',
    # tolerances
    'EPS_DUPLICATE', 'EPS_PLANE',
    # submodules
    'primitives', 'curve', 'hull', 'polygon', 'constants',
]
