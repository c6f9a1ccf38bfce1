"""Projection, camera and rigid-motion matrices plus small-matrix solvers."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from meshgeom.exceptions import SolverException
from meshgeom.matrix import (
    Matrix,
    cross,
    dot,
    normalize,
    transpose,
    vector,
)


def _require_shape(m: Matrix, shape: tuple[int, int]) -> None:
    if m.shape != shape:
        raise ValueError(f"expected a {shape[0]}x{shape[1]} matrix, got {m.shape}")


def _require_vector(v: Matrix, dim: int) -> None:
    if not v.is_vector() or v.size != dim:
        raise ValueError(f"expected a {dim}D vector")


def viewport_matrix(left, bottom, width, height) -> Matrix:
    """Viewport matrix for a window at (left, bottom) of size width x height."""
    return Matrix.from_rows([
        [0.5 * width, 0.0, 0.0, 0.5 * width + left],
        [0.0, 0.5 * height, 0.0, 0.5 * height + bottom],
        [0.0, 0.0, 0.5, 0.5],
        [0.0, 0.0, 0.0, 1.0],
    ])


def inverse_viewport_matrix(left, bottom, width, height) -> Matrix:
    """Inverse of :func:`viewport_matrix`."""
    return Matrix.from_rows([
        [2.0 / width, 0.0, 0.0, -1.0 - (left + left) / width],
        [0.0, 2.0 / height, 0.0, -1.0 - (bottom + bottom) / height],
        [0.0, 0.0, 2.0, -1.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def frustum_matrix(left, right, bottom, top, near, far) -> Matrix:
    """Perspective frustum matrix bounded by the given clipping planes."""
    return Matrix.from_rows([
        [(near + near) / (right - left), 0.0, (right + left) / (right - left), 0.0],
        [0.0, (near + near) / (top - bottom), (top + bottom) / (top - bottom), 0.0],
        [0.0, 0.0, -(far + near) / (far - near), -far * (near + near) / (far - near)],
        [0.0, 0.0, -1.0, 0.0],
    ])


def inverse_frustum_matrix(left, right, bottom, top, near, far) -> Matrix:
    """Inverse of :func:`frustum_matrix`."""
    nn = near + near
    return Matrix.from_rows([
        [(right - left) / nn, 0.0, 0.0, (right + left) / nn],
        [0.0, (top - bottom) / nn, 0.0, (top + bottom) / nn],
        [0.0, 0.0, 0.0, -1.0],
        [0.0, 0.0, (near - far) / (nn * far), (near + far) / (nn * far)],
    ])


def _perspective_bounds(fovy, aspect, z_near):
    t = z_near * math.tan(fovy * math.pi / 360.0)
    b = -t
    return b * aspect, t * aspect, b, t


def perspective_matrix(fovy, aspect, z_near, z_far) -> Matrix:
    """Perspective matrix from a vertical field of view in degrees."""
    l, r, b, t = _perspective_bounds(fovy, aspect, z_near)
    return frustum_matrix(l, r, b, t, z_near, z_far)


def inverse_perspective_matrix(fovy, aspect, z_near, z_far) -> Matrix:
    """Inverse of :func:`perspective_matrix`."""
    l, r, b, t = _perspective_bounds(fovy, aspect, z_near)
    return inverse_frustum_matrix(l, r, b, t, z_near, z_far)


def ortho_matrix(left, right, bottom, top, z_near=-1.0, z_far=1.0) -> Matrix:
    """Orthographic projection matrix."""
    return Matrix.from_rows([
        [2.0 / (right - left), 0.0, 0.0, -(right + left) / (right - left)],
        [0.0, 2.0 / (top - bottom), 0.0, -(top + bottom) / (top - bottom)],
        [0.0, 0.0, -2.0 / (z_far - z_near), -(z_far + z_near) / (z_far - z_near)],
        [0.0, 0.0, 0.0, 1.0],
    ])


def look_at_matrix(eye: Matrix, center: Matrix, up: Matrix) -> Matrix:
    """Camera matrix looking from ``eye`` towards ``center`` with ``up`` direction."""
    z = normalize(eye - center)
    x = normalize(cross(up, z))
    y = normalize(cross(z, x))
    return Matrix.from_rows([
        [x[0], x[1], x[2], -dot(x, eye)],
        [y[0], y[1], y[2], -dot(y, eye)],
        [z[0], z[1], z[2], -dot(z, eye)],
        [0.0, 0.0, 0.0, 1.0],
    ])


def translation_matrix(t: Matrix) -> Matrix:
    """Matrix translating by the 3D vector ``t``."""
    _require_vector(t, 3)
    return Matrix.from_rows([
        [1.0, 0.0, 0.0, t[0]],
        [0.0, 1.0, 0.0, t[1]],
        [0.0, 0.0, 1.0, t[2]],
        [0.0, 0.0, 0.0, 1.0],
    ])


def scaling_matrix(s) -> Matrix:
    """Scaling matrix from a uniform factor or a 3D vector of per-axis factors."""
    if isinstance(s, numbers.Number):
        sx = sy = sz = s
    else:
        _require_vector(s, 3)
        sx, sy, sz = s
    return Matrix.from_rows([
        [sx, 0.0, 0.0, 0.0],
        [0.0, sy, 0.0, 0.0],
        [0.0, 0.0, sz, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def _cos_sin_degrees(angle):
    a = angle * math.pi / 180.0
    return math.cos(a), math.sin(a)


def rotation_matrix_x(angle) -> Matrix:
    """Rotation about the x-axis by ``angle`` degrees."""
    ca, sa = _cos_sin_degrees(angle)
    return Matrix.from_rows([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, ca, -sa, 0.0],
        [0.0, sa, ca, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation_matrix_y(angle) -> Matrix:
    """Rotation about the y-axis by ``angle`` degrees."""
    ca, sa = _cos_sin_degrees(angle)
    return Matrix.from_rows([
        [ca, 0.0, sa, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [-sa, 0.0, ca, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation_matrix_z(angle) -> Matrix:
    """Rotation about the z-axis by ``angle`` degrees."""
    ca, sa = _cos_sin_degrees(angle)
    return Matrix.from_rows([
        [ca, -sa, 0.0, 0.0],
        [sa, ca, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation_matrix(axis: Matrix, angle) -> Matrix:
    """Rotation about an arbitrary axis by ``angle`` degrees."""
    _require_vector(axis, 3)
    c, s = _cos_sin_degrees(angle)
    omc = 1.0 - c
    x, y, z = normalize(axis)
    return Matrix.from_rows([
        [x * x * omc + c, x * y * omc - z * s, x * z * omc + y * s, 0.0],
        [y * x * omc + z * s, y * y * omc + c, y * z * omc - x * s, 0.0],
        [z * x * omc - y * s, z * y * omc + x * s, z * z * omc + c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def quaternion_rotation_matrix(quat: Matrix) -> Matrix:
    """Rotation given by a unit quaternion (x, y, z, w)."""
    _require_vector(quat, 4)
    x, y, z, w = quat
    return Matrix.from_rows([
        [1.0 - 2 * y * y - 2 * z * z, 2 * x * y - 2 * w * z, 2 * x * z + 2 * w * y, 0.0],
        [2 * x * y + 2 * w * z, 1.0 - 2 * x * x - 2 * z * z, 2 * y * z - 2 * w * x, 0.0],
        [2 * x * z - 2 * w * y, 2 * y * z + 2 * w * x, 1.0 - 2 * x * x - 2 * y * y, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def linear_part(m: Matrix) -> Matrix:
    """Upper-left 3x3 block of a 4x4 matrix."""
    _require_shape(m, (4, 4))
    return Matrix.from_rows(row[:3] for row in m.tolist()[:3])


def _homogeneous_rows(m: Matrix, v: Matrix, rows: int, translate: bool):
    _require_shape(m, (4, 4))
    _require_vector(v, 3)
    return [
        m[i, 0] * v[0] + m[i, 1] * v[1] + m[i, 2] * v[2] + (m[i, 3] if translate else 0.0)
        for i in range(rows)
    ]


def projective_transform(m: Matrix, v: Matrix) -> Matrix:
    """Transform point ``v`` by ``m`` including the homogeneous division."""
    x, y, z, w = _homogeneous_rows(m, v, 4, True)
    return vector(x / w, y / w, z / w)


def affine_transform(m: Matrix, v: Matrix) -> Matrix:
    """Transform point ``v`` by ``m`` without homogeneous division."""
    return vector(*_homogeneous_rows(m, v, 3, True))


def linear_transform(m: Matrix, v: Matrix) -> Matrix:
    """Transform direction ``v`` by the upper-left 3x3 block of ``m``."""
    return vector(*_homogeneous_rows(m, v, 3, False))


def determinant(m: Matrix):
    """Determinant of a 3x3 matrix."""
    _require_shape(m, (3, 3))
    return (
        m[0, 0] * m[1, 1] * m[2, 2] - m[0, 0] * m[1, 2] * m[2, 1]
        + m[1, 0] * m[0, 2] * m[2, 1] - m[1, 0] * m[0, 1] * m[2, 2]
        + m[2, 0] * m[0, 1] * m[1, 2] - m[2, 0] * m[0, 2] * m[1, 1]
    )


def _inverse3(m: Matrix) -> Matrix:
    det = determinant(m)
    if math.isnan(det) or abs(det) < 1.0e-10:
        raise SolverException("3x3 matrix not invertible")
    rows = [
        [m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1],
         m[0, 2] * m[2, 1] - m[0, 1] * m[2, 2],
         m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1]],
        [m[1, 2] * m[2, 0] - m[1, 0] * m[2, 2],
         m[0, 0] * m[2, 2] - m[0, 2] * m[2, 0],
         m[0, 2] * m[1, 0] - m[0, 0] * m[1, 2]],
        [m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0],
         m[0, 1] * m[2, 0] - m[0, 0] * m[2, 1],
         m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]],
    ]
    return Matrix.from_rows([[x / det for x in row] for row in rows])


def _inverse4(m: Matrix) -> Matrix:
    def minor(r0, r1, c0, c1):
        return m[r0, c0] * m[r1, c1] - m[r0, c1] * m[r1, c0]

    def factors(r0, r1):
        c00 = minor(r0, r1, 2, 3)
        return (c00, c00, minor(r0, r1, 1, 3), minor(r0, r1, 1, 2))

    fac0 = factors(2, 3)
    fac1 = factors(1, 3)
    fac2 = factors(1, 2)
    fac3 = factors(0, 3)
    fac4 = factors(0, 2)
    fac5 = factors(0, 1)

    vecs = [(m[r, 1], m[r, 0], m[r, 0], m[r, 0]) for r in range(4)]
    sign_a = (1.0, -1.0, 1.0, -1.0)
    sign_b = (-1.0, 1.0, -1.0, 1.0)

    def column(sign, a, fa, b, fb, c, fc):
        return [
            s * (a[k] * fa[k] - b[k] * fb[k] + c[k] * fc[k])
            for k, s in enumerate(sign)
        ]

    v0, v1, v2, v3 = vecs
    inv0 = column(sign_a, v1, fac0, v2, fac1, v3, fac2)
    inv1 = column(sign_b, v0, fac0, v2, fac3, v3, fac4)
    inv2 = column(sign_a, v0, fac1, v1, fac3, v3, fac5)
    inv3 = column(sign_b, v0, fac2, v1, fac4, v2, fac5)

    result = Matrix.from_columns([inv0, inv1, inv2, inv3])
    det = sum(m[0, j] * inv0[j] for j in range(4))
    result /= det
    return result


def inverse(m: Matrix) -> Matrix:
    """Inverse of a 3x3 or 4x4 matrix.

    Raises SolverException if a 3x3 matrix is (numerically) singular.
    """
    if m.shape == (3, 3):
        return _inverse3(m)
    if m.shape == (4, 4):
        return _inverse4(m)
    raise ValueError(f"inverse is only defined for 3x3 and 4x4 matrices, got {m.shape}")


@dataclass(frozen=True)
class EigenDecomposition:
    """Eigenvalues in descending order with their eigenvectors."""

    eigenvalues: tuple
    eigenvectors: tuple


def _largest_off_diagonal(a: Matrix) -> tuple[int, int]:
    if abs(a[0, 1]) < abs(a[0, 2]):
        return (1, 2) if abs(a[0, 2]) < abs(a[1, 2]) else (0, 2)
    return (1, 2) if abs(a[0, 1]) < abs(a[1, 2]) else (0, 1)


def _descending_order(d) -> tuple[int, int, int]:
    if d[0] > d[1]:
        if d[1] > d[2]:
            return (0, 1, 2)
        return (0, 2, 1) if d[0] > d[2] else (2, 0, 1)
    if d[0] > d[2]:
        return (1, 0, 2)
    return (1, 2, 0) if d[1] > d[2] else (2, 1, 0)


def symmetric_eigendecomposition(m: Matrix) -> EigenDecomposition:
    """Eigen-decompose a symmetric 3x3 matrix by Jacobi rotations.

    Raises SolverException if the iteration does not converge.
    """
    _require_shape(m, (3, 3))
    eps = 1e-10
    a = m.copy()
    v = Matrix.identity(3)

    for _ in range(99):
        i, j = _largest_off_diagonal(a)
        if abs(a[i, j]) < eps:
            break
        theta = 0.5 * (a[j, j] - a[i, i]) / a[i, j]
        t = 1.0 / (abs(theta) + math.sqrt(1.0 + theta * theta))
        if theta < 0.0:
            t = -t
        c = 1.0 / math.sqrt(1.0 + t * t)
        s = t * c

        r = Matrix.identity(3)
        r[i, i] = r[j, j] = c
        r[i, j] = s
        r[j, i] = -s

        a = transpose(r) @ a @ r
        v = v @ r
    else:
        raise SolverException("symmetric eigendecomposition did not converge")

    d = (a[0, 0], a[1, 1], a[2, 2])
    order = _descending_order(d)
    evec1 = vector(v[0, order[0]], v[1, order[0]], v[2, order[0]])
    evec2 = vector(v[0, order[1]], v[1, order[1]], v[2, order[1]])
    evec3 = normalize(cross(evec1, evec2))
    return EigenDecomposition(
        eigenvalues=tuple(d[k] for k in order),
        eigenvectors=(evec1, evec2, evec3),
    )