"""
Orientation predicates and small geometric kernels for 2D convex hulls.

Coordinates are stored as float32. Differences are taken in float32 and
products accumulated in float64, while the zero test uses a float32-sized
epsilon so that rounding noise from the narrow input type reads as
collinear.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np
from numba import njit


class AreaSign(IntEnum):
    """
    Sign of twice the signed area of triangle (a, b, c).

    Positive means c lies left of the directed line a -> b.
    """

    CLOCKWISE = -1
    COLLINEAR = 0
    COUNTERCLOCKWISE = 1


@dataclass(slots=True, frozen=True)
class Point:
    """
    Immutable 2D point held at float32 precision.

    Supports tuple-like access so it can be passed anywhere an (x, y)
    sequence is expected.
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(np.float32(self.x)))
        object.__setattr__(self, "y", float(np.float32(self.y)))

    def __iter__(self):
        """Enable tuple unpacking: x, y = point."""
        return iter((self.x, self.y))

    def __getitem__(self, idx: int) -> float:
        return (self.x, self.y)[idx]

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Point:
        return cls(float(arr[0]), float(arr[1]))


def as_point_array(point) -> np.ndarray:
    """Convert a Point or any (x, y) sequence to a float32 array of shape (2,)."""
    return np.array((point[0], point[1]), dtype=np.float32)


@njit(cache=True)
def area_sign(a: np.ndarray, b: np.ndarray, c: np.ndarray, eps: float) -> int:
    area2 = (
        np.float64(b[0] - a[0]) * np.float64(c[1] - a[1])
        - np.float64(c[0] - a[0]) * np.float64(b[1] - a[1])
    )
    if area2 > eps:
        return 1
    elif area2 < -eps:
        return -1
    return 0


@njit(cache=True)
def left(a: np.ndarray, b: np.ndarray, c: np.ndarray, eps: float) -> bool:
    """True if c is strictly left of the directed line a -> b."""
    return area_sign(a, b, c, eps) > 0


@njit(cache=True)
def left_on(a: np.ndarray, b: np.ndarray, c: np.ndarray, eps: float) -> bool:
    """True if c is left of or on the directed line a -> b."""
    return area_sign(a, b, c, eps) >= 0


@njit(cache=True)
def collinear(a: np.ndarray, b: np.ndarray, c: np.ndarray, eps: float) -> bool:
    return area_sign(a, b, c, eps) == 0


def orientation(a, b, c, eps: float) -> AreaSign:
    """Orientation of three points given as Point objects or (x, y) sequences."""
    return AreaSign(
        area_sign(as_point_array(a), as_point_array(b), as_point_array(c), eps)
    )


@njit(cache=True)
def seg_seg_intersect(
    a0: np.ndarray,
    a1: np.ndarray,
    b0: np.ndarray,
    b1: np.ndarray,
    eps: float,
) -> bool:
    """
    Test whether closed segments a0-a1 and b0-b1 intersect.

    Solves for the parametric offsets s (along a) and t (along b); the
    segments meet when both lie in [0, 1]. Parallel segments, including
    collinear overlapping ones, are reported as not intersecting.
    """
    denom = (
        np.float64(a0[0]) * np.float64(b1[1] - b0[1])
        + np.float64(a1[0]) * np.float64(b0[1] - b1[1])
        + np.float64(b1[0]) * np.float64(a1[1] - a0[1])
        + np.float64(b0[0]) * np.float64(a0[1] - a1[1])
    )
    if abs(denom) < eps:
        return False

    num = (
        np.float64(a0[0]) * np.float64(b1[1] - b0[1])
        + np.float64(b0[0]) * np.float64(a0[1] - b1[1])
        + np.float64(b1[0]) * np.float64(b0[1] - a0[1])
    )
    s = num / denom

    num = -(
        np.float64(a0[0]) * np.float64(b0[1] - a1[1])
        + np.float64(a1[0]) * np.float64(a0[1] - b0[1])
        + np.float64(b0[0]) * np.float64(a1[1] - a0[1])
    )
    t = num / denom

    return (0.0 <= s) and (s <= 1.0) and (0.0 <= t) and (t <= 1.0)


@njit(cache=True)
def point_in_polygon(
    points: np.ndarray,
    indices: np.ndarray,
    count: int,
    p: np.ndarray,
    eps: float,
) -> bool:
    """
    Test p against a counter-clockwise convex polygon.

    Args:
        points: (N, 2) float32 coordinate array.
        indices: Polygon vertices as indices into ``points``.
        count: Number of polygon vertices.
        p: Query point of shape (2,).

    Returns:
        True if p is left of or on every edge.
    """
    for i in range(count):
        j = (i + 1) % count
        if not left_on(points[indices[i]], points[indices[j]], p, eps):
            return False
    return True


@njit(cache=True)
def scan_lowest(
    points: np.ndarray,
    start: int,
    stop: int,
    best: int,
    eps: float,
) -> int:
    """
    Find the lowest point among ``best`` and points[start:stop].

    Lowest means smallest y; a y tie within eps goes to the larger x.
    Candidates are visited in order so the result matches appending them
    one at a time.

    Args:
        best: Index of the current lowest point, or -1 if there is none.

    Returns:
        Index of the lowest point.
    """
    for i in range(start, stop):
        if best < 0:
            best = i
            continue
        if points[i, 1] < points[best, 1] or (
            abs(points[i, 1] - points[best, 1]) <= eps
            and points[i, 0] > points[best, 0]
        ):
            best = i
    return best


@njit(cache=True)
def convex_boundaries_intersect(
    points_a: np.ndarray,
    indices_a: np.ndarray,
    count_a: int,
    points_b: np.ndarray,
    indices_b: np.ndarray,
    count_b: int,
    eps: float,
) -> bool:
    """
    Decide whether two counter-clockwise convex polygons intersect.

    Advances one edge cursor per step in the manner of the rotating-edges
    convex intersection algorithm, stopping at the first pair of edges
    that cross or touch. When no pair does, one polygon may still contain
    the other, which is settled by testing each polygon's first vertex
    against the other polygon.

    Cursors are wrapped only for vertex lookup. The loop runs until both
    cursors have completed one lap or either has completed two.
    """
    ia = 0
    ib = 0
    while (ia < count_a or ib < count_b) and ia < 2 * count_a and ib < 2 * count_b:
        a0 = points_a[indices_a[ia % count_a]]
        a1 = points_a[indices_a[(ia + 1) % count_a]]
        b0 = points_b[indices_b[ib % count_b]]
        b1 = points_b[indices_b[(ib + 1) % count_b]]

        if seg_seg_intersect(a0, a1, b0, b1, eps):
            return True

        cross = (
            np.float64(a1[0] - a0[0]) * np.float64(b1[1] - b0[1])
            - np.float64(a1[1] - a0[1]) * np.float64(b1[0] - b0[0])
        )
        a_left_b = left(b0, b1, a1, eps)
        b_left_a = left(a0, a1, b1, eps)

        if cross < -eps:
            if a_left_b:
                ib += 1
            else:
                ia += 1
        else:
            if b_left_a:
                ia += 1
            else:
                ib += 1

    if point_in_polygon(points_b, indices_b, count_b, points_a[indices_a[0]], eps):
        return True
    return point_in_polygon(points_a, indices_a, count_a, points_b[indices_b[0]], eps)
