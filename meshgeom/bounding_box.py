"""Axis-aligned bounding boxes in 3D."""

from __future__ import annotations

import sys

from meshgeom.matrix import Matrix, distance, maximum, minimum

_BIG = sys.float_info.max


class BoundingBox:
    """An axis-aligned box given by its minimum and maximum corners.

    A box built without corners is empty: adding points or boxes grows it.
    """

    __slots__ = ("min_point", "max_point")

    def __init__(self, min_point: Matrix | None = None, max_point: Matrix | None = None):
        if (min_point is None) != (max_point is None):
            raise ValueError("give both corners of the box or neither")
        if min_point is None:
            self.min_point = Matrix.filled(3, 1, _BIG)
            self.max_point = Matrix.filled(3, 1, -_BIG)
        else:
            self.min_point = min_point.copy()
            self.max_point = max_point.copy()

    def __iadd__(self, other):
        """Grow the box to enclose a point or another box."""
        if isinstance(other, BoundingBox):
            low, high = other.min_point, other.max_point
        elif isinstance(other, Matrix):
            low = high = other
        else:
            return NotImplemented
        self.min_point = minimum(self.min_point, low)
        self.max_point = maximum(self.max_point, high)
        return self

    def __add__(self, other):
        result = BoundingBox(self.min_point, self.max_point)
        return result.__iadd__(other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return self.min_point == other.min_point and self.max_point == other.max_point

    __hash__ = None

    def center(self) -> Matrix:
        """Midpoint of the two corners."""
        return 0.5 * (self.min_point + self.max_point)

    def is_empty(self) -> bool:
        """True if the maximum corner lies below the minimum on some axis."""
        return any(hi < lo for lo, hi in zip(self.min_point, self.max_point))

    def size(self) -> float:
        """Length of the box diagonal, zero for an empty box."""
        if self.is_empty():
            return 0.0
        return distance(self.max_point, self.min_point)

    def __repr__(self) -> str:
        return f"BoundingBox({self.min_point!r}, {self.max_point!r})"