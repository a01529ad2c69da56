"""
Polar ordering of boundary candidates around the hull pivot.

Both strategies sort ``boundary[1:]`` in place by angle around the point
referenced by ``boundary[0]`` and set the ``remove`` flag on every
candidate that shares a ray from the pivot with a farther candidate, so
that only the farthest point of each ray survives compaction.
"""

from __future__ import annotations

from functools import cmp_to_key

import numpy as np

from hull2d.geometry import area_sign


def _closer_is_first(
    pivot: np.ndarray,
    b: np.ndarray,
    c: np.ndarray,
    b_idx: int,
    c_idx: int,
    eps: float,
) -> bool:
    """
    Decide which of two points on the same ray from the pivot is redundant.

    Distances are compared per axis. On an exact tie the point with the
    smaller point index is the redundant one.

    Returns:
        True if b should be removed, False if c should be removed.
    """
    dx = abs(b[0] - pivot[0]) - abs(c[0] - pivot[0])
    dy = abs(b[1] - pivot[1]) - abs(c[1] - pivot[1])
    if dx < -eps or dy < -eps:
        return True
    if dx > eps or dy > eps:
        return False
    return b_idx < c_idx


class SortStrategy:
    """
    Base class for polar sort strategies.

    Subclasses reorder the candidates and flag redundant collinear ones;
    they must agree on which candidates survive.
    """

    def sort(self, points: np.ndarray, boundary: np.ndarray, eps: float) -> None:
        """
        Sort boundary candidates by angle around ``boundary[0]``.

        Args:
            points: (N, 2) float32 coordinate array.
            boundary: Used prefix of the flagged-index array, pivot first.
                Reordered and flagged in place.
            eps: Orientation tolerance.
        """
        raise NotImplementedError


class ComparatorSortStrategy(SortStrategy):
    """
    Comparison sort whose comparator flags collinear candidates.

    Two candidates on the same ray from the pivot compare with the nearer
    one ordered after the farther one, and the nearer one is flagged as a
    side effect. A comparison sort necessarily compares every pair that
    ends up adjacent, so each ray keeps exactly its farthest point.
    """

    def sort(self, points: np.ndarray, boundary: np.ndarray, eps: float) -> None:
        count = len(boundary)
        if count < 3:
            return
        point_idx = boundary["point_idx"]
        remove = boundary["remove"]
        pivot = points[point_idx[0]]

        def compare(i: int, j: int) -> int:
            b_idx = int(point_idx[i])
            c_idx = int(point_idx[j])
            if b_idx == c_idx:
                return 0
            b = points[b_idx]
            c = points[c_idx]
            sign = area_sign(pivot, b, c, eps)
            if sign > 0:
                return -1
            if sign < 0:
                return 1
            if _closer_is_first(pivot, b, c, b_idx, c_idx, eps):
                remove[i] = True
                return 1
            remove[j] = True
            return -1

        order = sorted(range(1, count), key=cmp_to_key(compare))
        boundary[1:] = boundary[order]


class StableSortStrategy(SortStrategy):
    """
    Stable angle sort followed by a separate collinear-resolution pass.

    Candidates are ordered by polar angle (farther first within an angle)
    and then walked once: each run of candidates collinear with the pivot
    keeps its farthest member and flags the rest.
    """

    def sort(self, points: np.ndarray, boundary: np.ndarray, eps: float) -> None:
        count = len(boundary)
        if count < 3:
            return
        pivot = points[boundary["point_idx"][0]]
        candidates = points[boundary["point_idx"][1:]]
        delta = candidates.astype(np.float64) - pivot.astype(np.float64)
        angles = np.arctan2(delta[:, 1], delta[:, 0])
        # y ties within eps may sit just below the pivot, left of it
        angles = np.where(angles < -np.pi / 2, angles + 2 * np.pi, angles)
        distances = delta[:, 0] ** 2 + delta[:, 1] ** 2
        order = np.lexsort((-distances, angles)) + 1
        boundary[1:] = boundary[order]
        self._flag_collinear(points, boundary, pivot, eps)

    def _flag_collinear(
        self,
        points: np.ndarray,
        boundary: np.ndarray,
        pivot: np.ndarray,
        eps: float,
    ) -> None:
        point_idx = boundary["point_idx"]
        remove = boundary["remove"]
        keep = 1
        for i in range(2, len(boundary)):
            kept_idx = int(point_idx[keep])
            cur_idx = int(point_idx[i])
            kept = points[kept_idx]
            cur = points[cur_idx]
            if area_sign(pivot, kept, cur, eps) != 0:
                keep = i
                continue
            if _closer_is_first(pivot, kept, cur, kept_idx, cur_idx, eps):
                remove[keep] = True
                keep = i
            else:
                remove[i] = True


def create_sort_strategy(name: str) -> SortStrategy:
    strategies = {
        "comparator": ComparatorSortStrategy,
        "stable": StableSortStrategy,
    }
    if name not in strategies:
        raise ValueError(f"Unknown sort strategy: {name}")
    return strategies[name]()
