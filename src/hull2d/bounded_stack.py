"""
Fixed-capacity LIFO buffer backed by a preallocated NumPy array.

Items are copied in on push and copied out on peek, so callers never hold
a view into the backing storage. The stack is meant to be reused as
scratch space across many hull computations and cleared between uses.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import DTypeLike

logger = logging.getLogger(__name__)


class BoundedStack:
    """
    Array-backed stack holding at most ``capacity`` items of one dtype.

    The dtype plays the role of the item size: every slot is exactly
    ``dtype.itemsize`` bytes and the whole buffer is allocated once.

    Attributes:
        capacity: Maximum number of items the stack can hold.
        dtype: NumPy dtype of a single item.
    """

    __slots__ = ("capacity", "dtype", "_data", "_top")

    def __init__(self, capacity: int, dtype: DTypeLike) -> None:
        """
        Allocate storage for ``capacity`` items of ``dtype``.

        Args:
            capacity: Maximum number of items, must be positive.
            dtype: Item type, any value accepted by ``np.dtype``.
        """
        self.capacity = 0
        self.dtype = np.dtype(dtype)
        self._data: np.ndarray | None = None
        self._top = -1
        self.init(capacity, dtype)

    def init(self, capacity: int, dtype: DTypeLike) -> bool:
        """
        (Re)allocate backing storage and reset to empty.

        Returns:
            False if storage could not be obtained. The stack must not be
            used after a failed allocation.
        """
        if capacity <= 0:
            raise ValueError(f"Stack capacity must be positive, got {capacity}")
        self.dtype = np.dtype(dtype)
        self._top = -1
        try:
            self._data = np.empty(capacity, dtype=self.dtype)
        except MemoryError:
            logger.warning(
                "Could not allocate stack of %d items (%d bytes each)",
                capacity,
                self.dtype.itemsize,
            )
            self._data = None
            self.capacity = 0
            return False
        self.capacity = capacity
        return True

    @property
    def allocated(self) -> bool:
        return self._data is not None

    @property
    def item_size(self) -> int:
        return self.dtype.itemsize

    def clear(self) -> None:
        self._top = -1

    def push(self, item) -> bool:
        """
        Copy ``item`` onto the top of the stack.

        Capacity is checked before anything is written, so a full stack
        is left untouched.

        Returns:
            False if the stack is full (or unallocated), True otherwise.
        """
        if self._data is None or self._top + 1 >= self.capacity:
            return False
        self._top += 1
        self._data[self._top] = item
        return True

    def pop(self) -> bool:
        """Drop the top item. Returns False if the stack was already empty."""
        if self._top < 0:
            return False
        self._top -= 1
        return True

    def peek(self, depth: int, out: np.ndarray) -> bool:
        """
        Copy the item ``depth`` levels below the top into ``out``.

        Args:
            depth: 0 for the top item, 1 for the one beneath it, etc.
            out: One-element array of the stack's dtype receiving the copy.

        Returns:
            False if ``depth`` is out of range; ``out`` is not modified.
        """
        if depth < 0 or depth > self._top:
            return False
        out[0] = self._data[self._top - depth]
        return True

    def count(self) -> int:
        return self._top + 1

    def __len__(self) -> int:
        return self._top + 1

    def __repr__(self) -> str:
        return f"BoundedStack(count={self.count()}, capacity={self.capacity}, dtype={self.dtype})"
