"""Piecewise-linear curves (polylines).

Array-level functions operate on ``(N, D)`` coordinate arrays and are shared
by the 2D and 3D polyline classes; the classes convert to and from the
point primitives and never expose their internal storage.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from .config import CurveConfig, DEFAULT_CURVE_CONFIG, HullConfig
from .constants import EPS_PLANE
from .exceptions import InvalidArgumentError, InvalidStateError, UnsupportedOperationError
from .hull import convex_hull
from .logging_utils import get_logger
from .primitives import (
    LineSegment2D, LineSegment3D, Plane, Point2D, Point3D, Ray3D, Vector2D, Vector3D,
    project_onto_segments,
)

logger = get_logger('spatia.curve')

__all__ = [
    'segment_lengths', 'cumulative_lengths', 'polyline_length',
    'point_at_length', 'point_at_fraction', 'closest_point_and_preceding_index',
    'closest_point_to', 'split_at_point', 'remove_adjacent_duplicates',
    'intersections_with', 'resample',
    'PolyLine', 'PolyLine2D', 'PolyLine3D',
]


def _as_coords(coords) -> np.ndarray:
    arr = np.asarray(coords, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise InvalidArgumentError(f"coordinates must be an (N,2) or (N,3) array, got shape {arr.shape}")
    return arr


def _require_segments(arr: np.ndarray, op: str) -> None:
    if arr.shape[0] < 2:
        raise InvalidStateError(f"{op} requires at least 2 points, got {arr.shape[0]}")


def _as_query(arr: np.ndarray, point) -> np.ndarray:
    p = np.asarray(point, dtype=np.float64).reshape(-1)
    if p.shape[0] != arr.shape[1]:
        raise InvalidArgumentError(
            f"query point has {p.shape[0]} coordinates, curve has {arr.shape[1]}")
    return p


def segment_lengths(coords) -> np.ndarray:
    """Lengths of the consecutive segments, shape (N-1,)."""
    arr = _as_coords(coords)
    return np.linalg.norm(np.diff(arr, axis=0), axis=1)


def cumulative_lengths(coords) -> np.ndarray:
    """Arc length at every vertex, shape (N,), starting at 0."""
    return np.concatenate(([0.0], np.cumsum(segment_lengths(coords))))


def polyline_length(coords) -> float:
    """Sum of consecutive-point distances; 0 for fewer than 2 points."""
    return float(cumulative_lengths(coords)[-1])


def point_at_length(coords, distance: float) -> np.ndarray:
    """Point at arc length ``distance`` from the first vertex.

    Distances past either end are clamped to the end points. Zero-length
    segments are skipped.
    """
    if np.isnan(distance):
        raise InvalidArgumentError("distance must be a number, got nan")
    arr = _as_coords(coords)
    _require_segments(arr, 'point_at_length')
    cumulative = cumulative_lengths(arr)
    if distance >= cumulative[-1]:
        return arr[-1].copy()
    if distance <= 0:
        return arr[0].copy()
    # cumulative[i] <= distance < cumulative[i+1]
    i = int(np.searchsorted(cumulative, distance, side='right')) - 1
    seg = arr[i + 1] - arr[i]
    seg_len = cumulative[i + 1] - cumulative[i]
    leftover = distance - cumulative[i]
    return arr[i] + leftover * (seg / seg_len)


def point_at_fraction(coords, fraction: float) -> np.ndarray:
    """Point at ``fraction`` of the total length; fraction must lie in [0, 1]."""
    if not (0 <= fraction <= 1):
        raise InvalidArgumentError(f"fraction must be between 0 and 1, got {fraction}")
    arr = _as_coords(coords)
    _require_segments(arr, 'point_at_fraction')
    return point_at_length(arr, fraction * polyline_length(arr))


def closest_point_and_preceding_index(coords, point) -> Tuple[int, np.ndarray]:
    """Closest point on the curve and the index of its segment's first vertex.

    Each segment is searched with a clamped projection; on equal distances
    the lowest segment index wins.
    """
    arr = _as_coords(coords)
    _require_segments(arr, 'closest_point_and_preceding_index')
    p = _as_query(arr, point)
    projected = project_onto_segments(arr[:-1], arr[1:], p, clamp_to_segment=True)
    errors = np.linalg.norm(projected - p, axis=1)
    index = int(np.argmin(errors))
    return index, projected[index]


def closest_point_to(coords, point) -> np.ndarray:
    return closest_point_and_preceding_index(coords, point)[1]


def split_at_point(coords, point) -> Tuple[np.ndarray, np.ndarray]:
    """Split at the projection of ``point``; both halves share the projected point."""
    arr = _as_coords(coords)
    index, projected = closest_point_and_preceding_index(arr, point)
    logger.debug("split at segment %d of %d", index, arr.shape[0] - 1)
    first = np.vstack([arr[:index + 1], projected])
    second = np.vstack([projected, arr[index + 1:]])
    return first, second


def remove_adjacent_duplicates(coords, tolerance: float) -> np.ndarray:
    """Drop points equal (per coordinate, within ``tolerance``) to the last kept point."""
    if tolerance < 0:
        raise InvalidArgumentError(f"tolerance must be non-negative, got {tolerance}")
    arr = _as_coords(coords)
    if arr.shape[0] == 0:
        return arr.copy()
    kept = [arr[0]]
    for row in arr[1:]:
        if not np.all(np.abs(row - kept[-1]) <= tolerance):
            kept.append(row)
    if len(kept) != arr.shape[0]:
        logger.debug("removed %d adjacent duplicates", arr.shape[0] - len(kept))
    return np.array(kept, dtype=np.float64)


def intersections_with(coords, plane: Plane, tolerance: float = EPS_PLANE) -> np.ndarray:
    """Crossings of a 3D curve with ``plane`` in traversal order, shape (K, 3).

    A vertex lying exactly on the plane is reported once for every segment
    touching it.
    """
    arr = _as_coords(coords)
    if arr.shape[1] != 3:
        raise InvalidArgumentError("plane intersections need 3D coordinates")
    hits = []
    for a, b in zip(arr[:-1], arr[1:]):
        segment = LineSegment3D(Point3D.from_array(a), Point3D.from_array(b))
        hit = segment.intersection_with(plane, tolerance)
        if hit is not None:
            hits.append(hit.to_array())
    return np.array(hits, dtype=np.float64).reshape(-1, 3)


def resample(coords, count: int) -> np.ndarray:
    """``count`` evenly spaced points plus the exact last vertex (count + 1 rows)."""
    if int(count) != count or count < 1:
        raise InvalidArgumentError(f"number of points must be a positive integer, got {count}")
    count = int(count)
    arr = _as_coords(coords)
    _require_segments(arr, 'resample')
    step = 1.0 / count
    rows = [point_at_fraction(arr, i * step) for i in range(count)]
    rows.append(arr[-1].copy())
    return np.array(rows, dtype=np.float64)


class PolyLine:
    """Immutable ordered sequence of points forming connected line segments.

    Not meant to be instantiated directly; use PolyLine2D or PolyLine3D.
    """
    __slots__ = ('_points', '_coords', '_config')
    _POINT = None
    _SEGMENT = None

    def __init__(self, points: Iterable, config: Optional[CurveConfig] = None):
        pts = tuple(self._coerce(p) for p in points)
        if not pts:
            raise InvalidArgumentError(f"{type(self).__name__} needs at least one point")
        coords = np.array([p.to_array() for p in pts], dtype=np.float64)
        coords.flags.writeable = False
        self._points = pts
        self._coords = coords
        self._config = config if config is not None else DEFAULT_CURVE_CONFIG

    @classmethod
    def from_array(cls, coords, config: Optional[CurveConfig] = None):
        arr = np.asarray(coords, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != cls._POINT._DIM:
            raise InvalidArgumentError(
                f"{cls.__name__} needs an (N,{cls._POINT._DIM}) array, got shape {arr.shape}")
        return cls((cls._POINT.from_array(row) for row in arr), config=config)

    def _coerce(self, p):
        if isinstance(p, self._POINT):
            return p
        return self._POINT.from_array(p)

    def _derive(self, coords):
        return type(self).from_array(coords, config=self._config)

    # Sequence protocol
    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __getitem__(self, key):
        return self._points[key]

    def __eq__(self, other):
        if not isinstance(other, PolyLine):
            return NotImplemented
        return type(self) is type(other) and self._points == other._points

    def __hash__(self):
        return hash((type(self).__name__, self._points))

    def __repr__(self):
        return f"{type(self).__name__}({list(self._points)!r})"

    @property
    def points(self) -> tuple:
        return self._points

    @property
    def config(self) -> CurveConfig:
        return self._config

    def to_array(self) -> np.ndarray:
        return self._coords.copy()

    @property
    def length(self) -> float:
        return polyline_length(self._coords)

    def segments(self) -> list:
        """Segments between consecutive points; zero-length ones included."""
        return [self._SEGMENT(a, b) for a, b in zip(self._points[:-1], self._points[1:])]

    def point_at_fraction(self, fraction: float):
        return self._POINT.from_array(point_at_fraction(self._coords, fraction))

    def point_at_length(self, distance: float):
        return self._POINT.from_array(point_at_length(self._coords, distance))

    def closest_point_and_preceding_index(self, point) -> tuple:
        index, projected = closest_point_and_preceding_index(self._coords, self._coerce(point).to_array())
        return index, self._POINT.from_array(projected)

    def preceding_point_index(self, point) -> int:
        return self.closest_point_and_preceding_index(point)[0]

    def closest_point_to(self, point):
        return self.closest_point_and_preceding_index(point)[1]

    def split_at_point(self, point) -> tuple:
        first, second = split_at_point(self._coords, self._coerce(point).to_array())
        return self._derive(first), self._derive(second)

    def remove_adjacent_duplicates(self, tolerance: Optional[float] = None):
        tol = self._config.duplicate_tolerance if tolerance is None else tolerance
        return self._derive(remove_adjacent_duplicates(self._coords, tol))

    def resample(self, count: int):
        return self._derive(resample(self._coords, count))

    def translate(self, shift):
        return type(self)((p + shift for p in self._points), config=self._config)


class PolyLine2D(PolyLine):
    __slots__ = ()
    _POINT = Point2D
    _SEGMENT = LineSegment2D

    def rotate(self, angle: float, center: Optional[Point2D] = None) -> 'PolyLine2D':
        """Rotate counter-clockwise by ``angle`` radians about ``center`` (origin by default)."""
        return PolyLine2D((p.rotate(angle, center) for p in self._points), config=self._config)

    def translate(self, shift: Vector2D) -> 'PolyLine2D':
        return super().translate(shift)

    def convex_hull(self, config: Optional[HullConfig] = None):
        return convex_hull(self._points, config)


class PolyLine3D(PolyLine):
    __slots__ = ()
    _POINT = Point3D
    _SEGMENT = LineSegment3D

    def rotate(self, axis: Union[Vector3D, Ray3D], angle: float) -> 'PolyLine3D':
        """Rotate by ``angle`` radians about a direction through the origin or a ray."""
        return PolyLine3D((p.rotate(axis, angle) for p in self._points), config=self._config)

    def translate(self, shift: Vector3D) -> 'PolyLine3D':
        return super().translate(shift)

    def intersections_with(self, plane: Plane, tolerance: Optional[float] = None) -> List[Point3D]:
        tol = self._config.plane_tolerance if tolerance is None else tolerance
        return [Point3D.from_array(row) for row in intersections_with(self._coords, plane, tol)]

    @property
    def is_planar(self) -> bool:
        return self.is_planar_within(self._config.plane_tolerance)

    def is_planar_within(self, tolerance: float) -> bool:
        raise UnsupportedOperationError("planarity testing of 3D polylines is not supported")
