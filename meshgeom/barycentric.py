"""Barycentric coordinates of a point with respect to a triangle."""

from __future__ import annotations

from meshgeom.matrix import Matrix, vector

# index pairs used to project the triangle onto the plane of the dropped axis
_PROJECTION = ((1, 2), (2, 0), (0, 1))


def barycentric_coordinates(p: Matrix, u: Matrix, v: Matrix, w: Matrix) -> Matrix:
    """Coordinates (a, b, c) with p = a*u + b*v + c*w for p in the plane of u, v, w.

    The triangle is projected along the largest component of its normal.
    A degenerate triangle yields the barycenter (1/3, 1/3, 1/3).
    """
    vu = v - u
    wu = w - u
    pu = p - u

    normal = (
        vu[1] * wu[2] - vu[2] * wu[1],
        vu[2] * wu[0] - vu[0] * wu[2],
        vu[0] * wu[1] - vu[1] * wu[0],
    )
    ax, ay, az = (abs(n) for n in normal)

    if ax > ay:
        axis = 0 if ax > az else 2
    else:
        axis = 1 if ay > az else 2

    n = normal[axis]
    if 1.0 + abs(n) == 1.0:
        third = 1.0 / 3.0
        return vector(third, third, third)

    i, j = _PROJECTION[axis]
    b1 = (pu[i] * wu[j] - pu[j] * wu[i]) / n
    b2 = (vu[i] * pu[j] - vu[j] * pu[i]) / n
    return vector(1.0 - b1 - b2, b1, b2)