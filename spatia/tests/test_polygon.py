import numpy as np
import pytest
from matplotlib.path import Path

from spatia.core.exceptions import InvalidArgumentError, InvalidStateError
from spatia.core.polygon import Polygon2D, is_point_in_polygon, points_in_polygon, polygon_signed_area
from spatia.core.primitives import Point2D


def polygon_open():
    return Polygon2D([(0, 0), (0.25, 0.5), (1, 1), (-1, 1), (0.5, -0.5)])


def polygon_closed():
    return Polygon2D([(0, 0), (0.25, 0.5), (1, 1), (-1, 1), (0.5, -0.5), (0, 0)])


def triangle_a():
    return Polygon2D([(0.25, 0), (0.5, 1), (1, -1)])


def triangle_b():
    return Polygon2D([(0.5, 1), (1, -1), (0.25, 0)])


class TestConstruction:

    def test_keeps_points_in_order(self):
        expected = [Point2D(0, 0), Point2D(0.25, 0.5), Point2D(1, 1), Point2D(-1, 1), Point2D(0.5, -0.5)]
        assert list(polygon_open()) == expected

    def test_drops_leading_point_of_closed_ring(self):
        expected = [Point2D(0.25, 0.5), Point2D(1, 1), Point2D(-1, 1), Point2D(0.5, -0.5), Point2D(0, 0)]
        assert list(polygon_closed()) == expected
        assert len(polygon_closed()) == 5

    def test_too_few_vertices(self):
        with pytest.raises(InvalidStateError):
            Polygon2D([(0, 0), (1, 1)])
        with pytest.raises(InvalidStateError):
            Polygon2D([(0, 0), (1, 1), (0, 0)])

    def test_from_array_shape_checked(self):
        with pytest.raises(InvalidArgumentError):
            Polygon2D.from_array(np.zeros((4, 3)))

    def test_edges_include_closing_edge(self):
        edges = triangle_a().edges()
        assert len(edges) == 3
        assert edges[-1].start == Point2D(1, -1)
        assert edges[-1].end == Point2D(0.25, 0)

    def test_signed_area_and_winding(self):
        ccw = Polygon2D([(0, 0), (2, 0), (2, 1), (0, 1)])
        assert abs(ccw.signed_area - 2.0) < 1e-12
        assert not ccw.is_clockwise
        cw = Polygon2D(list(ccw)[::-1])
        assert abs(cw.signed_area + 2.0) < 1e-12
        assert cw.is_clockwise
        assert cw.area == ccw.area
        assert polygon_signed_area([(0, 0), (1, 1)]) == 0.0
        assert polygon_signed_area(ccw) == ccw.signed_area
        assert abs(polygon_signed_area(np.array([[0, 0], [2, 0], [0, 2]])) - 2.0) < 1e-12


FIXTURE_CASES = [
    (0.5, 0, True),
    (0.35, 0, True),
    (0.5, 0.5, True),
    (0.75, 0.1, False),
    (0.75, -0.1, True),
    (0.5, -0.5, False),
    (0.25, 0.5, False),
    (0.25, -0.5, False),
    (0.0, 0, False),
    (1.5, 0, False),
]


@pytest.mark.parametrize("x, y, inside", FIXTURE_CASES)
def test_point_in_triangle(x, y, inside):
    assert is_point_in_polygon(Point2D(x, y), triangle_a()) is inside


@pytest.mark.parametrize("x, y, inside", FIXTURE_CASES)
def test_point_in_rotated_vertex_order(x, y, inside):
    assert is_point_in_polygon(Point2D(x, y), triangle_b()) is inside


@pytest.mark.parametrize("x, y, inside", FIXTURE_CASES)
def test_winding_does_not_matter(x, y, inside):
    reversed_ring = Polygon2D(list(triangle_a())[::-1])
    assert is_point_in_polygon((x, y), reversed_ring) is inside


def test_concave_polygon():
    # U shape opening upwards
    u = Polygon2D([(0, 0), (3, 0), (3, 3), (2, 3), (2, 1), (1, 1), (1, 3), (0, 3)])
    assert u.contains(Point2D(0.5, 2))
    assert u.contains(Point2D(2.5, 2))
    assert not u.contains(Point2D(1.5, 2))
    assert u.contains(Point2D(1.5, 0.5))


def test_accepts_plain_vertex_sequences():
    assert is_point_in_polygon((0.5, 0.5), [(0, 0), (1, 0), (1, 1), (0, 1)])


def test_boundary_points_do_not_raise():
    # Points on an edge or vertex classify either way under the even-odd rule
    square = Polygon2D([(0, 0), (1, 0), (1, 1), (0, 1)])
    for p in [(1.0, 0.5), (0.0, 0.5), (0.5, 0.0), (0.5, 1.0), (0.0, 0.0), (1.0, 1.0)]:
        assert is_point_in_polygon(p, square) in (True, False)


def test_horizontal_edges_are_skipped():
    square = Polygon2D([(0, 0), (1, 0), (1, 1), (0, 1)])
    assert is_point_in_polygon((0.5, 0.5), square)
    assert not is_point_in_polygon((-0.5, 0.0), Polygon2D([(0, 0), (1, 0), (1, 1)]))


def test_query_must_be_2d():
    with pytest.raises(InvalidArgumentError):
        is_point_in_polygon((0, 0, 0), triangle_a())


@pytest.mark.parametrize("seed", range(4))
def test_vectorized_matches_scalar(seed):
    rng = np.random.default_rng(seed)
    ring = Polygon2D(rng.uniform(-1.0, 1.0, size=(9, 2)))
    pts = rng.uniform(-1.5, 1.5, size=(300, 2))
    expected = np.array([is_point_in_polygon(p, ring) for p in pts])
    np.testing.assert_array_equal(points_in_polygon(pts, ring), expected)


def test_agrees_with_matplotlib_path_away_from_edges():
    star = Polygon2D([(0, 3), (1, 1), (3, 1), (1.5, -0.5), (2, -3), (0, -1.5),
                      (-2, -3), (-1.5, -0.5), (-3, 1), (-1, 1)])
    rng = np.random.default_rng(7)
    pts = rng.uniform(-3.5, 3.5, size=(2000, 2))
    # keep points that are not within 1e-6 of any edge
    ring = star.to_array()
    a = ring; b = np.roll(ring, -1, axis=0)
    far = []
    for p in pts:
        d = b - a
        t = np.clip(np.einsum('ij,ij->i', p - a, d) / np.einsum('ij,ij->i', d, d), 0.0, 1.0)
        dist = np.linalg.norm(a + t[:, None] * d - p, axis=1)
        far.append(dist.min() > 1e-6)
    pts = pts[np.array(far)]
    reference = Path(ring).contains_points(pts)
    np.testing.assert_array_equal(points_in_polygon(pts, star), reference)
