"""Closed polygons and point-in-polygon classification."""
from __future__ import annotations

from typing import Iterable

import numpy as np

from .exceptions import InvalidArgumentError, InvalidStateError
from .primitives import LineSegment2D, Point2D, cross2d

__all__ = ['Polygon2D', 'is_point_in_polygon', 'points_in_polygon', 'polygon_signed_area']


class Polygon2D:
    """Immutable ring of 2D vertices; the last vertex connects back to the first.

    When the supplied first and last points are equal the leading point is
    dropped, so ``[a, b, c, a]`` is stored as ``[b, c, a]``. Winding order is
    kept as given.
    """
    __slots__ = ('_points', '_coords')

    def __init__(self, points: Iterable):
        pts = [p if isinstance(p, Point2D) else Point2D.from_array(p) for p in points]
        if len(pts) > 1 and pts[0] == pts[-1]:
            pts = pts[1:]
        if len(pts) < 3:
            raise InvalidStateError(f"polygon needs at least 3 distinct vertices, got {len(pts)}")
        coords = np.array([p.to_array() for p in pts], dtype=np.float64)
        coords.flags.writeable = False
        self._points = tuple(pts)
        self._coords = coords

    @classmethod
    def from_array(cls, coords) -> 'Polygon2D':
        arr = np.asarray(coords, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise InvalidArgumentError(f"polygon needs an (N,2) array, got shape {arr.shape}")
        return cls(arr)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __getitem__(self, key):
        return self._points[key]

    def __eq__(self, other):
        if not isinstance(other, Polygon2D):
            return NotImplemented
        return self._points == other._points

    def __hash__(self):
        return hash(self._points)

    def __repr__(self):
        return f"Polygon2D({list(self._points)!r})"

    @property
    def points(self) -> tuple:
        return self._points

    def to_array(self) -> np.ndarray:
        return self._coords.copy()

    def edges(self) -> list:
        """Edges in vertex order, closing edge last."""
        n = len(self._points)
        return [LineSegment2D(self._points[i], self._points[(i + 1) % n]) for i in range(n)]

    @property
    def signed_area(self) -> float:
        return polygon_signed_area(self._coords)

    @property
    def area(self) -> float:
        return abs(self.signed_area)

    @property
    def is_clockwise(self) -> bool:
        return self.signed_area < 0

    def contains(self, point) -> bool:
        return is_point_in_polygon(point, self)

    def convex_hull(self, config=None) -> 'Polygon2D':
        from .hull import convex_hull
        return convex_hull(self._points, config)


def _ring_coords(polygon) -> np.ndarray:
    if isinstance(polygon, Polygon2D):
        return polygon._coords
    return Polygon2D(polygon)._coords


def _point_xy(point) -> tuple:
    if isinstance(point, Point2D):
        return point.x, point.y
    arr = np.asarray(point, dtype=np.float64).reshape(-1)
    if arr.shape[0] != 2:
        raise InvalidArgumentError(f"expected a 2D point, got {arr.shape[0]} coordinates")
    return float(arr[0]), float(arr[1])


def polygon_signed_area(ring) -> float:
    """Signed area of a vertex ring, accepting a Polygon2D or an (N,2) array.

    Sums the cross product of each vertex with its successor, wrapping back
    to the first. Counter-clockwise rings are positive and clockwise rings
    negative. Rings of fewer than three vertices have no area.
    """
    coords = ring._coords if isinstance(ring, Polygon2D) else np.asarray(ring, dtype=np.float64)
    if coords.shape[0] < 3:
        return 0.0
    following = np.roll(coords, -1, axis=0)
    return float(0.5 * np.sum(cross2d(coords, following)))


def is_point_in_polygon(point, polygon) -> bool:
    """Even-odd (crossing number) test with a horizontal ray towards +x.

    Points exactly on an edge or vertex may classify either way. The result
    does not depend on the ring's winding order.
    """
    x, y = _point_xy(point)
    ring = _ring_coords(polygon)
    inside = False
    n = ring.shape[0]
    j = n - 1
    for i in range(n):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i
    return inside


def points_in_polygon(points, polygon) -> np.ndarray:
    """Vectorized is_point_in_polygon for an (M,2) array; returns (M,) bool."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    ring = _ring_coords(polygon)
    xi = ring[:, 0][None, :]; yi = ring[:, 1][None, :]
    prev = np.roll(ring, 1, axis=0)
    xj = prev[:, 0][None, :]; yj = prev[:, 1][None, :]
    px = pts[:, 0][:, None]; py = pts[:, 1][:, None]
    straddles = (yi > py) != (yj > py)
    # Non-straddling edges may divide by zero; they are masked out below
    with np.errstate(divide='ignore', invalid='ignore'):
        x_cross = (xj - xi) * (py - yi) / (yj - yi) + xi
    crossings = straddles & (px < x_cross)
    return (np.count_nonzero(crossings, axis=1) % 2) == 1
