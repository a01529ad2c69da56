import numpy as np
import pytest

from hull2d import CONFIG
from hull2d import AreaSign
from hull2d import Point
from hull2d import orientation
from hull2d.geometry import area_sign
from hull2d.geometry import as_point_array
from hull2d.geometry import collinear
from hull2d.geometry import left
from hull2d.geometry import left_on
from hull2d.geometry import point_in_polygon
from hull2d.geometry import scan_lowest
from hull2d.geometry import seg_seg_intersect

EPS = CONFIG.epsilon


def pts(*coords):
    return [as_point_array(c) for c in coords]


def test_epsilon_is_float32_machine_epsilon():
    assert EPS == pytest.approx(float(np.finfo(np.float32).eps))


@pytest.mark.parametrize(
    "c, expected",
    [
        ((0.0, 1.0), AreaSign.COUNTERCLOCKWISE),
        ((0.0, -1.0), AreaSign.CLOCKWISE),
        ((2.0, 0.0), AreaSign.COLLINEAR),
        ((-3.0, 0.0), AreaSign.COLLINEAR),
    ],
)
def test_orientation(c, expected):
    assert orientation((0, 0), (1, 0), c, EPS) is expected


def test_near_zero_area_reads_as_collinear():
    a, b, c = pts((0.0, 0.0), (1.0, 1.0), (2.0, 2.0 + 1e-8))
    assert area_sign(a, b, c, EPS) == 0
    assert collinear(a, b, c, EPS)


def test_left_and_left_on():
    a, b, above, on = pts((0, 0), (4, 0), (1, 1), (2, 0))
    assert left(a, b, above, EPS)
    assert left_on(a, b, above, EPS)
    assert not left(a, b, on, EPS)
    assert left_on(a, b, on, EPS)
    assert not left_on(b, a, above, EPS)


def test_point_is_stored_at_float32_precision():
    p = Point(0.1, 0.2)
    assert p.x == float(np.float32(0.1))
    x, y = p
    assert (x, y) == (p[0], p[1])
    assert Point.from_array(np.array([3.0, 4.0])) == Point(3, 4)


@pytest.mark.parametrize(
    "segments, expected",
    [
        (((0, 0), (2, 2), (0, 2), (2, 0)), True),
        (((0, 0), (2, 0), (1, 0), (1, 3)), True),
        (((0, 0), (2, 0), (2, 0), (3, 1)), True),
        (((0, 0), (1, 0), (2, -1), (2, 1)), False),
        (((0, 0), (2, 0), (0, 1), (2, 1)), False),
    ],
    ids=["crossing", "t-junction", "shared-endpoint", "disjoint", "parallel"],
)
def test_seg_seg_intersect(segments, expected):
    assert seg_seg_intersect(*pts(*segments), EPS) is expected


def test_collinear_overlapping_segments_are_not_reported():
    assert not seg_seg_intersect(*pts((0, 0), (2, 0), (1, 0), (3, 0)), EPS)


def test_point_in_polygon_counts_boundary_as_inside():
    points = np.array([[0, 0], [2, 0], [2, 2], [0, 2]], dtype=np.float32)
    indices = np.arange(4, dtype=np.uint32)

    assert point_in_polygon(points, indices, 4, as_point_array((1, 1)), EPS)
    assert point_in_polygon(points, indices, 4, as_point_array((2, 1)), EPS)
    assert point_in_polygon(points, indices, 4, as_point_array((0, 0)), EPS)
    assert not point_in_polygon(points, indices, 4, as_point_array((2.5, 1)), EPS)


def test_scan_lowest_prefers_smallest_y_then_largest_x():
    points = np.array([[0, 1], [3, 0], [5, 0], [4, 0], [9, 2]], dtype=np.float32)
    assert scan_lowest(points, 0, 5, -1, EPS) == 2
    assert scan_lowest(points, 3, 5, 2, EPS) == 2
    assert scan_lowest(points, 1, 2, 0, EPS) == 1
