"""Quickhull tests; scipy's ConvexHull serves as the reference vertex set."""
import numpy as np
import pytest
from scipy.spatial import ConvexHull

from spatia.core.config import HullConfig
from spatia.core.curve import PolyLine2D
from spatia.core.exceptions import InvalidArgumentError
from spatia.core.hull import collapse_collinear, convex_hull, convex_hull_indices
from spatia.core.polygon import Polygon2D, is_point_in_polygon
from spatia.core.primitives import Point2D


def _outside_count(hull: Polygon2D, pts: np.ndarray, tol: float = 1e-9) -> int:
    """Number of points strictly outside the (clockwise) hull by more than tol."""
    ring = hull.to_array()
    a = ring
    b = np.roll(ring, -1, axis=0)
    outside = 0
    for p in pts:
        cross = (b[:, 0] - a[:, 0]) * (p[1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (p[0] - a[:, 0])
        edge_len = np.linalg.norm(b - a, axis=1)
        # clockwise ring: interior lies to the right of every edge
        if np.any(cross / edge_len > tol):
            outside += 1
    return outside


def test_square_with_interior_point():
    pts = [(0, 0), (1, 0), (1, 1), (0, 1), (0.5, 0.5)]
    hull = convex_hull(pts)
    assert set(hull.points) == {Point2D(0, 0), Point2D(1, 0), Point2D(1, 1), Point2D(0, 1)}
    assert len(hull) == 4


def test_traversal_order_starts_left_and_goes_over_the_top():
    pts = [(0, 0), (1, 0), (1, 1), (0, 1), (0.5, 0.5)]
    hull = convex_hull(pts)
    assert list(hull) == [Point2D(0, 0), Point2D(0, 1), Point2D(1, 1), Point2D(1, 0)]
    assert hull.is_clockwise


def test_three_points_returned_as_given():
    pts = [Point2D(2, 2), Point2D(0, 0), Point2D(3, -1)]
    hull = convex_hull(pts)
    assert list(hull) == pts


def test_three_collinear_points_returned_as_given():
    assert convex_hull_indices([(0, 0), (1, 1), (2, 2)]) == [0, 1, 2]


def test_two_point_indices_returned_as_given():
    assert convex_hull_indices([(1, 1), (0, 0)]) == [0, 1]


@pytest.mark.parametrize("pts", [[], [(1, 1)]])
def test_indices_need_two_points(pts):
    with pytest.raises(InvalidArgumentError, match="at least 2 points"):
        convex_hull_indices(pts)


def test_closed_three_point_ring_rejected():
    with pytest.raises(InvalidArgumentError, match="2 distinct"):
        convex_hull([(0, 0), (1, 1), (0, 0)])


@pytest.mark.parametrize("pts", [[], [(1, 1)], [(0, 0), (1, 1)]])
def test_too_few_points(pts):
    with pytest.raises(InvalidArgumentError, match="at least 3 points"):
        convex_hull(pts)


def test_all_collinear_points_rejected():
    with pytest.raises(InvalidArgumentError, match="collinear"):
        convex_hull([(0, 0), (1, 1), (2, 2), (3, 3), (0.5, 0.5)])


def test_all_coincident_points_rejected():
    with pytest.raises(InvalidArgumentError, match="coincide"):
        convex_hull([(1, 1)] * 5)


def test_extreme_ties_use_y():
    # Several points share min x and max x; the hull must keep the corners
    pts = [(0, 0.5), (0, 0), (0, 1), (2, 0.5), (2, 1), (2, 0), (1, 0.5)]
    hull = convex_hull(pts)
    assert set(hull.points) == {Point2D(0, 0), Point2D(0, 1), Point2D(2, 1), Point2D(2, 0)}
    assert hull[0] == Point2D(0, 0)


def test_duplicate_points_do_not_duplicate_vertices():
    pts = [(0, 0), (0, 0), (4, 0), (4, 0), (2, 3), (2, 3), (2, 1)]
    hull = convex_hull(pts)
    assert len(hull) == 3
    assert set(hull.points) == {Point2D(0, 0), Point2D(4, 0), Point2D(2, 3)}


def test_points_on_hull_edges_are_not_vertices():
    pts = [(0, 0), (2, 0), (2, 2), (0, 2), (1, 0), (2, 1), (1, 2), (0, 1)]
    hull = convex_hull(pts)
    assert len(hull) == 4


@pytest.mark.parametrize("seed", range(8))
def test_matches_scipy_on_random_clouds(seed):
    rng = np.random.default_rng(seed)
    pts = rng.normal(size=(200, 2))
    hull = convex_hull(pts)
    reference = {tuple(pts[i]) for i in ConvexHull(pts).vertices}
    assert {tuple(p) for p in hull.to_array()} == reference
    assert _outside_count(hull, pts) == 0
    assert len(hull) <= len(pts)


@pytest.mark.parametrize("seed", range(3))
def test_input_points_lie_inside_or_on_hull(seed):
    rng = np.random.default_rng(seed)
    pts = rng.uniform(-1.0, 1.0, size=(500, 2))
    hull = convex_hull(pts)
    assert _outside_count(hull, pts) == 0
    interior = pts[np.abs(pts).max(axis=1) < 0.5]
    assert all(is_point_in_polygon(p, hull) for p in interior)


def test_points_on_a_circle_need_no_recursion_limit():
    angles = np.linspace(0.0, 2.0 * np.pi, 5000, endpoint=False)
    pts = np.column_stack([np.cos(angles), np.sin(angles)])
    hull = convex_hull(pts)
    assert len(hull) == 5000


def test_collapse_collinear_pass():
    pts = np.array([[0, 0], [0, 1], [1, 1.0000001], [2, 1], [2, 0]], dtype=float)
    plain = convex_hull(pts)
    assert len(plain) == 5
    collapsed = convex_hull(pts, HullConfig(collinear_tolerance=1e-3))
    assert len(collapsed) == 4
    assert Point2D(1, 1.0000001) not in collapsed.points


def test_collapse_keeps_three_vertices():
    pts = [(0, 0), (1, 1e-9), (2, 0), (1, 5)]
    assert len(collapse_collinear(pts, [0, 1, 2], 1.0)) == 3


def test_polyline_and_polygon_delegate():
    line = PolyLine2D([(0, 0), (3, 0), (1, 1), (3, 3), (0, 3)])
    hull = line.convex_hull()
    assert len(hull) == 4
    assert Polygon2D(line.points).convex_hull() == hull
