"""Cones of normal directions."""

from __future__ import annotations

import math

from meshgeom.matrix import Matrix, dot


class NormalCone:
    """A cone given by a unit center normal and an opening angle in radians."""

    __slots__ = ("_center_normal", "_angle")

    def __init__(self, normal: Matrix, angle: float = 0.0):
        self._center_normal = normal.copy()
        self._angle = float(angle)

    @property
    def center_normal(self) -> Matrix:
        """The cone axis."""
        return self._center_normal

    @property
    def angle(self) -> float:
        """The opening angle (radius) in radians."""
        return self._angle

    def merge(self, other) -> "NormalCone":
        """Grow this cone to enclose a normal or another cone; returns self."""
        if isinstance(other, Matrix):
            other = NormalCone(other)
        dp = dot(self._center_normal, other._center_normal)

        if dp > 0.99999:
            self._angle = max(self._angle, other._angle)
        elif dp < -0.99999:
            self._angle = 2.0 * math.pi
        else:
            center_angle = math.acos(dp)
            min_angle = min(-self._angle, center_angle - other._angle)
            max_angle = max(self._angle, center_angle + other._angle)
            self._angle = 0.5 * (max_angle - min_angle)

            axis_angle = 0.5 * (min_angle + max_angle)
            self._center_normal = (
                self._center_normal * math.sin(center_angle - axis_angle)
                + other._center_normal * math.sin(axis_angle)
            ) / math.sin(center_angle)
        return self

    def __repr__(self) -> str:
        return f"NormalCone({self._center_normal!r}, {self._angle!r})"