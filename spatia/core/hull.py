"""2D convex hull (quickhull).

The divide-and-conquer recursion runs on an explicit work stack so deep,
collinear-heavy inputs cannot hit the interpreter recursion limit. Items are
pushed in reverse so vertices come off the stack in the order the recursive
formulation would emit them: leftmost point, upper chain, rightmost point,
lower chain (clockwise with the y axis pointing up).
"""
from __future__ import annotations

from typing import List, Optional

import numpy as np

from .config import DEFAULT_HULL_CONFIG, HullConfig
from .constants import EPS_COLINEAR
from .exceptions import InvalidArgumentError
from .logging_utils import get_logger
from .polygon import Polygon2D
from .primitives import Point2D, cross2d

logger = get_logger('spatia.hull')

__all__ = ['convex_hull', 'convex_hull_indices', 'collapse_collinear']

_VERTEX = 'vertex'
_CHORD = 'chord'


def _as_points2d(points) -> np.ndarray:
    rows = [p.to_array() if isinstance(p, Point2D) else p for p in points]
    arr = np.asarray(rows, dtype=np.float64)
    if arr.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidArgumentError(f"convex hull needs 2D points, got shape {arr.shape}")
    return arr


def _orient(arr: np.ndarray, a: int, b: int, candidates: np.ndarray) -> np.ndarray:
    """Twice the signed area of (a, b, c) for every candidate c; positive when c is left of a->b."""
    return cross2d(arr[b] - arr[a], arr[candidates] - arr[a])


def _extreme_indices(arr: np.ndarray):
    # lexsort keys: last is primary
    left = int(np.lexsort((arr[:, 1], arr[:, 0]))[0])
    right = int(np.lexsort((-arr[:, 1], -arr[:, 0]))[0])
    return left, right


def convex_hull_indices(coords) -> List[int]:
    """Indices of the hull vertices of an (N,2) point cloud in traversal order.

    Two or three points are returned as given. Fewer than two points, or
    four or more whose hull collapses to a segment, raise InvalidArgumentError.
    """
    arr = _as_points2d(coords)
    n = arr.shape[0]
    if n < 2:
        raise InvalidArgumentError(f"convex hull needs at least 2 points, got {n}")
    if n <= 3:
        return list(range(n))

    left, right = _extreme_indices(arr)
    if left == right:
        raise InvalidArgumentError("convex hull is undefined: all points coincide")

    idx = np.arange(n)
    rest = idx[(idx != left) & (idx != right)]
    side = _orient(arr, left, right, rest)
    upper = rest[side > EPS_COLINEAR]
    lower = rest[side < -EPS_COLINEAR]
    logger.debug("hull of %d points: %d above chord, %d below, %d on it",
                 n, upper.size, lower.size, rest.size - upper.size - lower.size)

    hull = [left]
    stack = [(_CHORD, right, left, lower), (_VERTEX, right), (_CHORD, left, right, upper)]
    while stack:
        item = stack.pop()
        if item[0] == _VERTEX:
            hull.append(item[1])
            continue
        _, a, b, subset = item
        if subset.size == 0:
            continue
        far = int(subset[int(np.argmax(_orient(arr, a, b, subset)))])
        remaining = subset[subset != far]
        outer_a = remaining[_orient(arr, a, far, remaining) > EPS_COLINEAR]
        outer_b = remaining[_orient(arr, far, b, remaining) > EPS_COLINEAR]
        stack.append((_CHORD, far, b, outer_b))
        stack.append((_VERTEX, far))
        stack.append((_CHORD, a, far, outer_a))

    if len(hull) < 3:
        raise InvalidArgumentError("convex hull is undefined: all points are collinear")
    return hull


def collapse_collinear(coords, indices: List[int], tolerance: float) -> List[int]:
    """Drop hull vertices whose neighbours make a cross product within ``tolerance``.

    At least three vertices are always kept.
    """
    arr = _as_points2d(coords)
    kept = list(indices)
    changed = True
    while changed and len(kept) > 3:
        changed = False
        for pos in range(len(kept)):
            prev_i = kept[pos - 1]
            cur_i = kept[pos]
            next_i = kept[(pos + 1) % len(kept)]
            turn = cross2d(arr[cur_i] - arr[prev_i], arr[next_i] - arr[cur_i])
            if abs(float(turn)) <= tolerance:
                del kept[pos]
                changed = True
                break
    return kept


def convex_hull(points, config: Optional[HullConfig] = None) -> Polygon2D:
    """Convex hull of an unordered 2D point cloud as a Polygon2D.

    ``points`` may be Point2D instances or (x, y) pairs.
    """
    cfg = config if config is not None else DEFAULT_HULL_CONFIG
    arr = _as_points2d(points)
    if arr.shape[0] < 3:
        raise InvalidArgumentError(f"convex hull polygon needs at least 3 points, got {arr.shape[0]}")
    indices = convex_hull_indices(arr)
    if len(indices) == 3 and np.array_equal(arr[indices[0]], arr[indices[-1]]):
        raise InvalidArgumentError("convex hull is undefined: closed ring of 3 points has only 2 distinct vertices")
    if cfg.collinear_tolerance > 0 and len(indices) > 3:
        indices = collapse_collinear(arr, indices, cfg.collinear_tolerance)
    logger.debug("hull keeps %d of %d points", len(indices), arr.shape[0])
    return Polygon2D(Point2D.from_array(arr[i]) for i in indices)
