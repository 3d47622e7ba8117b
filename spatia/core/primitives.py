"""Point, vector, segment, plane and ray primitives.

All primitives are frozen dataclasses of plain floats. Coordinate algebra is
done through numpy arrays (``to_array`` / ``from_array``) so the curve and
hull engines can switch between single values and batched arrays freely.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Optional, Union

import numpy as np

from .constants import EPS_LENGTH, EPS_PLANE
from .exceptions import InvalidArgumentError, InvalidStateError

__all__ = [
    'Point2D', 'Point3D', 'Vector2D', 'Vector3D',
    'LineSegment2D', 'LineSegment3D', 'Plane', 'Ray3D',
    'rotation_matrix', 'project_onto_segments', 'cross2d',
]


class _Coordinates:
    """Shared array conversion for the frozen coordinate dataclasses."""
    __slots__ = ()
    _DIM = 0

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, float(getattr(self, f.name)))

    def to_array(self) -> np.ndarray:
        return np.array([getattr(self, f.name) for f in fields(self)], dtype=np.float64)

    @classmethod
    def from_array(cls, values):
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
        if arr.shape[0] != cls._DIM:
            raise InvalidArgumentError(
                f"{cls.__name__} needs {cls._DIM} coordinates, got {arr.shape[0]}")
        return cls(*arr.tolist())

    def __iter__(self):
        return iter(self.to_array().tolist())

    def __getitem__(self, index):
        return self.to_array().tolist()[index]

    def __len__(self):
        return self._DIM


class _PointOps(_Coordinates):
    __slots__ = ()
    _VECTOR = None

    def distance_to(self, other) -> float:
        return float(np.linalg.norm(other.to_array() - self.to_array()))

    def vector_to(self, other):
        return self._VECTOR.from_array(other.to_array() - self.to_array())

    def equals(self, other, tolerance: float) -> bool:
        """Return True when every coordinate differs by at most ``tolerance``."""
        if tolerance < 0:
            raise InvalidArgumentError(f"tolerance must be non-negative, got {tolerance}")
        return bool(np.all(np.abs(other.to_array() - self.to_array()) <= tolerance))

    def mid_point(self, other):
        return type(self).from_array(0.5 * (self.to_array() + other.to_array()))

    def to_vector(self):
        return self._VECTOR.from_array(self.to_array())

    def __add__(self, vector):
        if not isinstance(vector, self._VECTOR):
            return NotImplemented
        return type(self).from_array(self.to_array() + vector.to_array())

    def __sub__(self, other):
        if isinstance(other, type(self)):
            return self._VECTOR.from_array(self.to_array() - other.to_array())
        if isinstance(other, self._VECTOR):
            return type(self).from_array(self.to_array() - other.to_array())
        return NotImplemented


class _VectorOps(_Coordinates):
    __slots__ = ()

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.to_array()))

    def normalize(self):
        norm = self.length
        if norm == 0.0:
            raise InvalidStateError(f"cannot normalize zero-length vector {self!r}")
        return type(self).from_array(self.to_array() / norm)

    def dot(self, other) -> float:
        return float(np.dot(self.to_array(), other.to_array()))

    def scale(self, factor: float):
        return type(self).from_array(float(factor) * self.to_array())

    def __add__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        return type(self).from_array(self.to_array() + other.to_array())

    def __sub__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        return type(self).from_array(self.to_array() - other.to_array())

    def __neg__(self):
        return type(self).from_array(-self.to_array())

    def __mul__(self, factor):
        if isinstance(factor, (int, float, np.floating, np.integer)):
            return self.scale(factor)
        return NotImplemented

    __rmul__ = __mul__


@dataclass(frozen=True)
class Vector2D(_VectorOps):
    x: float
    y: float
    _DIM = 2

    def cross(self, other: 'Vector2D') -> float:
        """Signed z-component of the 3D cross product; positive when ``other``
        is counter-clockwise from ``self``."""
        return self.x * other.y - self.y * other.x

    def rotate(self, angle: float) -> 'Vector2D':
        c, s = math.cos(angle), math.sin(angle)
        return Vector2D(c * self.x - s * self.y, s * self.x + c * self.y)


@dataclass(frozen=True)
class Vector3D(_VectorOps):
    x: float
    y: float
    z: float
    _DIM = 3

    def cross(self, other: 'Vector3D') -> 'Vector3D':
        return Vector3D.from_array(np.cross(self.to_array(), other.to_array()))

    def rotate(self, axis: 'Vector3D', angle: float) -> 'Vector3D':
        return Vector3D.from_array(rotation_matrix(axis, angle) @ self.to_array())


@dataclass(frozen=True)
class Point2D(_PointOps):
    x: float
    y: float
    _DIM = 2
    _VECTOR = Vector2D

    def rotate(self, angle: float, center: Optional['Point2D'] = None) -> 'Point2D':
        """Rotate counter-clockwise by ``angle`` radians about ``center`` (origin by default)."""
        pivot = center if center is not None else Point2D(0.0, 0.0)
        return pivot + pivot.vector_to(self).rotate(angle)


@dataclass(frozen=True)
class Point3D(_PointOps):
    x: float
    y: float
    z: float
    _DIM = 3
    _VECTOR = Vector3D

    def rotate(self, axis: Union[Vector3D, 'Ray3D'], angle: float) -> 'Point3D':
        """Rotate by ``angle`` radians about ``axis``.

        A ``Vector3D`` axis passes through the origin; a ``Ray3D`` axis passes
        through its ``through_point``. Rotation follows the right-hand rule.
        """
        if isinstance(axis, Ray3D):
            base = axis.through_point.to_array()
            rot = rotation_matrix(axis.direction, angle)
            return Point3D.from_array(base + rot @ (self.to_array() - base))
        return Point3D.from_array(rotation_matrix(axis, angle) @ self.to_array())

    def project_on(self, plane: 'Plane') -> 'Point3D':
        return plane.project(self)


def cross2d(a, b) -> np.ndarray:
    """Batched 2D cross product of array-likes shaped (..., 2)."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]


def rotation_matrix(axis: Vector3D, angle: float) -> np.ndarray:
    """Rodrigues rotation matrix about a (not necessarily unit) axis vector."""
    k = axis.normalize().to_array()
    K = np.array([
        [0.0, -k[2], k[1]],
        [k[2], 0.0, -k[0]],
        [-k[1], k[0], 0.0],
    ])
    return np.eye(3) + math.sin(angle) * K + (1.0 - math.cos(angle)) * (K @ K)


def project_onto_segments(starts, ends, point, clamp_to_segment: bool = True) -> np.ndarray:
    """Project ``point`` onto each segment ``starts[i] -> ends[i]``.

    starts, ends : arrays of shape (M, D)
    point : array-like of shape (D,)
    Returns an (M, D) array of projected points. Degenerate segments project
    to their start point.
    """
    a = np.asarray(starts, dtype=np.float64)
    b = np.asarray(ends, dtype=np.float64)
    p = np.asarray(point, dtype=np.float64)
    d = b - a
    denom = np.einsum('ij,ij->i', d, d)
    degenerate = denom <= EPS_LENGTH * EPS_LENGTH
    safe = np.where(degenerate, 1.0, denom)
    t = np.einsum('ij,ij->i', p - a, d) / safe
    if clamp_to_segment:
        t = np.clip(t, 0.0, 1.0)
    t = np.where(degenerate, 0.0, t)
    return a + t[:, None] * d


class _SegmentOps:
    __slots__ = ()

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def direction(self):
        """Unit direction from start to end."""
        return self.start.vector_to(self.end).normalize()

    def closest_point_to(self, point, clamp_to_segment: bool = True):
        """Closest point on the segment (or its infinite line when not clamped)."""
        projected = project_onto_segments(
            self.start.to_array()[None, :], self.end.to_array()[None, :],
            point.to_array(), clamp_to_segment)
        return type(self.start).from_array(projected[0])

    def reversed(self):
        return type(self)(self.end, self.start)


@dataclass(frozen=True)
class LineSegment2D(_SegmentOps):
    start: Point2D
    end: Point2D


@dataclass(frozen=True)
class LineSegment3D(_SegmentOps):
    start: Point3D
    end: Point3D

    def intersection_with(self, plane: 'Plane', tolerance: float = EPS_PLANE) -> Optional[Point3D]:
        return plane.intersection_with(self, tolerance)


@dataclass(frozen=True)
class Ray3D:
    through_point: Point3D
    direction: Vector3D

    def __post_init__(self):
        object.__setattr__(self, 'direction', self.direction.normalize())


@dataclass(frozen=True)
class Plane:
    """Plane through ``root_point`` with unit ``normal``."""
    normal: Vector3D
    root_point: Point3D

    def __post_init__(self):
        object.__setattr__(self, 'normal', self.normal.normalize())

    @classmethod
    def from_points(cls, p1: Point3D, p2: Point3D, p3: Point3D) -> 'Plane':
        normal = p1.vector_to(p2).cross(p1.vector_to(p3))
        if normal.length <= EPS_LENGTH:
            raise InvalidArgumentError("plane points are collinear")
        return cls(normal, p1)

    @property
    def offset(self) -> float:
        """Signed distance of the plane from the origin along ``normal``."""
        return self.normal.dot(self.root_point.to_vector())

    def signed_distance_to(self, point: Point3D) -> float:
        return self.normal.dot(self.root_point.vector_to(point))

    def project(self, point: Point3D) -> Point3D:
        return point - self.normal.scale(self.signed_distance_to(point))

    def intersection_with(self, segment: LineSegment3D,
                          tolerance: float = EPS_PLANE) -> Optional[Point3D]:
        """Point where ``segment`` crosses the plane, or None.

        Segments parallel to the plane (including those lying in it) and
        zero-length segments report no intersection.
        """
        if tolerance < 0:
            raise InvalidArgumentError(f"tolerance must be non-negative, got {tolerance}")
        u = segment.start.vector_to(segment.end)
        seg_len = u.length
        if seg_len <= EPS_LENGTH:
            return None
        along_normal = u.dot(self.normal)
        if abs(along_normal) / seg_len < tolerance or along_normal == 0.0:
            return None
        t = -self.signed_distance_to(segment.start) / along_normal
        if t < 0.0 or t > 1.0:
            return None
        return segment.start + u.scale(t)
