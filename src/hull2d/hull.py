"""
Bounded-memory 2D convex hull with Graham scan construction.

A hull owns a preallocated point buffer and a parallel buffer of flagged
indices describing its boundary. Before computation the boundary lists
every candidate point; after a successful computation it lists the convex
boundary counter-clockwise, starting from the lowest point. Construction
uses a caller-supplied BoundedStack as scratch space so that one stack can
serve many hulls.

Complexity:
    Hull construction is O(s log s) for s candidate points.
    The intersection test is O(n + m) for boundaries of n and m points.
"""

from __future__ import annotations

import logging

import numpy as np

from hull2d.bounded_stack import BoundedStack
from hull2d.config import CONFIG
from hull2d.config import HullConfig
from hull2d.geometry import as_point_array
from hull2d.geometry import convex_boundaries_intersect
from hull2d.geometry import left
from hull2d.geometry import point_in_polygon
from hull2d.geometry import scan_lowest
from hull2d.polar_sort import SortStrategy
from hull2d.polar_sort import create_sort_strategy

logger = logging.getLogger(__name__)

FLAGGED_INDEX_DTYPE = np.dtype([("point_idx", np.uint32), ("remove", np.bool_)])


class Hull2D:
    """
    Convex hull of an append-only, capacity-bounded point set.

    Points are appended with add_point/add_points, which mark the hull
    dirty. compute_hull rebuilds the boundary and clears the flag; queries
    (point_in_hull, check_intersect) require a clean hull.

    Example:
        >>> hull = Hull2D()
        >>> hull.add_points([(0, 0), (2, 0), (2, 2), (0, 2), (1, 1)])
        >>> hull.compute_hull(hull.create_stack())
        True
        >>> hull.boundary_count
        4

    Attributes:
        config: Capacity and tolerance settings.
    """

    __slots__ = (
        "config",
        "_points",
        "_boundary",
        "_point_count",
        "_boundary_count",
        "_lowest_index",
        "_dirty",
        "_sort_strategy",
    )

    def __init__(self, config: HullConfig | None = None) -> None:
        self.config = config or CONFIG
        capacity = self.config.max_points_per_hull
        self._points = np.zeros((capacity, 2), dtype=np.float32)
        self._boundary = np.zeros(capacity, dtype=FLAGGED_INDEX_DTYPE)
        self._sort_strategy: SortStrategy = create_sort_strategy(
            self.config.sort_strategy
        )
        self.init()

    def init(self) -> None:
        """Reset to the empty, dirty state without releasing storage."""
        self._point_count = 0
        self._boundary_count = 0
        self._lowest_index = 0
        self._dirty = True

    def clear(self) -> None:
        self.init()

    @property
    def capacity(self) -> int:
        return len(self._points)

    @property
    def points(self) -> np.ndarray:
        """View of the (point_count, 2) float32 points added so far."""
        return self._points[: self._point_count]

    @property
    def boundary(self) -> np.ndarray:
        """View of the used part of the flagged-index boundary buffer."""
        return self._boundary[: self._boundary_count]

    @property
    def point_count(self) -> int:
        return self._point_count

    @property
    def boundary_count(self) -> int:
        return self._boundary_count

    @property
    def lowest_index(self) -> int:
        return self._lowest_index

    @property
    def dirty(self) -> bool:
        return self._dirty

    def __len__(self) -> int:
        return self._point_count

    def __repr__(self) -> str:
        return (
            f"Hull2D(points={self._point_count}, boundary={self._boundary_count}, "
            f"dirty={self._dirty})"
        )

    def boundary_points(self) -> np.ndarray:
        """Coordinates of the boundary in order, as a (boundary_count, 2) copy."""
        return self._points[self._boundary["point_idx"][: self._boundary_count]]

    def create_stack(self) -> BoundedStack:
        """Build a scratch stack large enough for any computation on this hull."""
        return BoundedStack(self.capacity, FLAGGED_INDEX_DTYPE)

    def add_point(self, point) -> None:
        """
        Append one point and reference it from the boundary list.

        Args:
            point: Point or (x, y) sequence, stored at float32 precision.

        Raises:
            ValueError: If the hull is already at capacity.
        """
        self._check_room(1)
        self._points[self._point_count] = as_point_array(point)
        self._boundary[self._boundary_count] = (self._point_count, False)
        self._update_lowest(1)
        self._point_count += 1
        self._boundary_count += 1
        self._dirty = True

    def add_points(self, points) -> None:
        """
        Append many points; equivalent to add_point on each in order.

        Args:
            points: (N, 2) array-like of coordinates.

        Raises:
            ValueError: If the points do not fit in the remaining capacity.
        """
        arr = np.asarray(points, dtype=np.float32).reshape(-1, 2)
        count = len(arr)
        if count == 0:
            return
        self._check_room(count)
        start = self._point_count
        self._points[start : start + count] = arr
        new_refs = self._boundary[self._boundary_count : self._boundary_count + count]
        new_refs["point_idx"] = np.arange(start, start + count, dtype=np.uint32)
        new_refs["remove"] = False
        self._update_lowest(count)
        self._point_count += count
        self._boundary_count += count
        self._dirty = True

    def _check_room(self, count: int) -> None:
        if self._point_count + count > self.capacity:
            raise ValueError(
                f"Hull capacity exceeded: {self._point_count} + {count} > {self.capacity}"
            )

    def _update_lowest(self, count: int) -> None:
        """Track the lowest point over ``count`` points just written past the end."""
        if self._boundary_count == 0:
            current = -1
        else:
            current = int(self._boundary[self._lowest_index]["point_idx"])
        lowest = scan_lowest(
            self._points,
            self._point_count,
            self._point_count + count,
            current,
            self.config.epsilon,
        )
        if lowest != current:
            self._lowest_index = self._boundary_count + (lowest - self._point_count)

    def compute_hull(self, stack: BoundedStack) -> bool:
        """
        Compute the convex boundary of all points added so far.

        Sorts candidates by angle around the lowest point, drops redundant
        collinear candidates and runs Graham's scan with ``stack`` as
        working storage. Returns immediately if the hull is not dirty.

        Args:
            stack: Scratch stack, e.g. from create_stack(). Cleared on use.

        Returns:
            False if fewer than three points remain or all points are
            collinear; the dirty flag is then left set.

        Raises:
            ValueError: If the stack has the wrong dtype or is too small.
        """
        if not self._dirty:
            return True

        self._check_stack(stack)

        if self._boundary_count < 3:
            logger.debug(
                "Not enough points to build a hull: %d", self._boundary_count
            )
            return False

        candidates = self._boundary_count
        self._sort()
        self._squash()

        if self._boundary_count < 3:
            logger.debug(
                "Hull is degenerate: %d of %d candidates survived collinear removal",
                self._boundary_count,
                candidates,
            )
            return False

        self._graham_scan(stack)
        self._copy_stack(stack)
        self._dirty = False

        logger.debug(
            "Computed hull with %d boundary points from %d candidates",
            self._boundary_count,
            candidates,
        )
        return True

    def _check_stack(self, stack: BoundedStack) -> None:
        if stack.dtype != FLAGGED_INDEX_DTYPE:
            raise ValueError(f"Scratch stack must hold {FLAGGED_INDEX_DTYPE}, got {stack.dtype}")
        if stack.capacity < self.capacity:
            raise ValueError(
                f"Scratch stack too small: {stack.capacity} < {self.capacity}"
            )

    def _sort(self) -> None:
        """Move the lowest point to the front and sort the rest around it."""
        lowest = self._lowest_index
        self._boundary[[0, lowest]] = self._boundary[[lowest, 0]]
        self._lowest_index = 0
        self._sort_strategy.sort(
            self._points,
            self._boundary[: self._boundary_count],
            self.config.epsilon,
        )

    def _squash(self) -> None:
        """Drop candidates flagged for removal, keeping the survivors' order."""
        used = self._boundary[: self._boundary_count]
        survivors = used[~used["remove"]]
        count = len(survivors)
        self._boundary[:count] = survivors
        self._boundary_count = count

    def _graham_scan(self, stack: BoundedStack) -> None:
        """Leave the indices of the boundary points on ``stack``, bottom first."""
        points = self._points
        eps = self.config.epsilon
        p1_ref = np.empty(1, dtype=FLAGGED_INDEX_DTYPE)
        p2_ref = np.empty(1, dtype=FLAGGED_INDEX_DTYPE)

        stack.clear()
        # the pivot and the first sorted point are always on the hull
        stack.push(self._boundary[0])
        stack.push(self._boundary[1])

        i = 2
        while i < self._boundary_count:
            if not (stack.peek(1, p1_ref) and stack.peek(0, p2_ref)):
                raise RuntimeError("Graham scan popped below its base edge")
            p3_ref = self._boundary[i]
            p1 = points[p1_ref[0]["point_idx"]]
            p2 = points[p2_ref[0]["point_idx"]]
            p3 = points[p3_ref["point_idx"]]
            if left(p1, p2, p3, eps):
                if not stack.push(p3_ref):
                    raise RuntimeError("Scratch stack overflow during Graham scan")
                i += 1
            else:
                stack.pop()

    def _copy_stack(self, stack: BoundedStack) -> None:
        count = stack.count()
        for i in range(count - 1, -1, -1):
            stack.peek(0, self._boundary[i : i + 1])
            stack.pop()
        self._boundary_count = count

    def _require_computed(self, operation: str) -> None:
        if self._dirty:
            raise ValueError(f"Hull must be computed before {operation}")

    def _boundary_indices(self) -> np.ndarray:
        return np.ascontiguousarray(self._boundary["point_idx"][: self._boundary_count])

    def point_in_hull(self, point) -> bool:
        """
        Test whether a point lies inside or on the computed boundary.

        Raises:
            ValueError: If the hull is dirty.
        """
        self._require_computed("point_in_hull")
        return bool(
            point_in_polygon(
                self._points,
                self._boundary_indices(),
                self._boundary_count,
                as_point_array(point),
                self.config.epsilon,
            )
        )

    def check_intersect(self, other: Hull2D) -> bool:
        """
        Test whether this hull and ``other`` intersect.

        Edges that cross or touch count as an intersection, as does one
        hull containing the other.

        Raises:
            ValueError: If either hull is dirty.
        """
        self._require_computed("check_intersect")
        other._require_computed("check_intersect")
        return bool(
            convex_boundaries_intersect(
                self._points,
                self._boundary_indices(),
                self._boundary_count,
                other._points,
                other._boundary_indices(),
                other._boundary_count,
                self.config.epsilon,
            )
        )


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


if __name__ == "__main__":
    import time

    configure_logging()

    rng = np.random.default_rng(42)
    lower_left = Hull2D()
    upper_right = Hull2D()
    lower_left.add_points(rng.normal((-0.5, -0.5), 0.15, size=(200, 2)))
    upper_right.add_points(rng.normal((0.5, 0.5), 0.15, size=(200, 2)))

    scratch = lower_left.create_stack()
    start = time.perf_counter()
    lower_left.compute_hull(scratch)
    upper_right.compute_hull(scratch)
    elapsed = time.perf_counter() - start

    logger.info("Lower-left hull: %d boundary points", lower_left.boundary_count)
    logger.info("Upper-right hull: %d boundary points", upper_right.boundary_count)
    logger.info("Intersect: %s", lower_left.check_intersect(upper_right))
    logger.info("Time: %.3fs (includes JIT compilation)", elapsed)
