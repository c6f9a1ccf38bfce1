import math

import pytest

from meshgeom.exceptions import SolverException
from meshgeom.matrix import Matrix, dot, norm, transpose, vector
from meshgeom.transforms import (
    EigenDecomposition,
    affine_transform,
    determinant,
    frustum_matrix,
    inverse,
    inverse_frustum_matrix,
    inverse_perspective_matrix,
    inverse_viewport_matrix,
    linear_part,
    linear_transform,
    look_at_matrix,
    ortho_matrix,
    perspective_matrix,
    projective_transform,
    quaternion_rotation_matrix,
    rotation_matrix,
    rotation_matrix_x,
    rotation_matrix_y,
    rotation_matrix_z,
    scaling_matrix,
    symmetric_eigendecomposition,
    translation_matrix,
    viewport_matrix,
)


def assert_close(a, b, tol=1e-9):
    assert a.shape == b.shape
    for x, y in zip(a, b):
        assert x == pytest.approx(y, abs=tol)


def test_viewport_round_trip():
    m = viewport_matrix(10.0, 20.0, 640.0, 480.0)
    assert_close(m @ inverse_viewport_matrix(10.0, 20.0, 640.0, 480.0), Matrix.identity(4))


def test_viewport_maps_ndc_corner_to_window_corner():
    p = projective_transform(viewport_matrix(10.0, 20.0, 640.0, 480.0), vector(-1.0, -1.0, -1.0))
    assert_close(p, vector(10.0, 20.0, 0.0))


def test_frustum_round_trip():
    args = (-1.0, 2.0, -0.5, 1.5, 0.5, 100.0)
    assert_close(frustum_matrix(*args) @ inverse_frustum_matrix(*args), Matrix.identity(4))


def test_perspective_round_trip():
    m = perspective_matrix(45.0, 1.5, 0.1, 50.0)
    mi = inverse_perspective_matrix(45.0, 1.5, 0.1, 50.0)
    assert_close(m @ mi, Matrix.identity(4), tol=1e-7)


def test_perspective_near_plane_maps_to_minus_one():
    p = projective_transform(perspective_matrix(60.0, 1.0, 0.5, 10.0), vector(0.0, 0.0, -0.5))
    assert p[2] == pytest.approx(-1.0)


def test_ortho_maps_box_to_unit_cube():
    m = ortho_matrix(-2.0, 4.0, 1.0, 3.0)
    assert_close(affine_transform(m, vector(-2.0, 1.0, 1.0)), vector(-1.0, -1.0, -1.0))
    assert_close(affine_transform(m, vector(4.0, 3.0, -1.0)), vector(1.0, 1.0, 1.0))


def test_look_at_maps_eye_to_origin_and_center_to_negative_z():
    eye = vector(3.0, 4.0, 5.0)
    center = vector(0.0, 0.0, 0.0)
    m = look_at_matrix(eye, center, vector(0.0, 1.0, 0.0))
    assert_close(affine_transform(m, eye), vector(0.0, 0.0, 0.0))
    c = affine_transform(m, center)
    assert c[0] == pytest.approx(0.0, abs=1e-12)
    assert c[1] == pytest.approx(0.0, abs=1e-12)
    assert c[2] == pytest.approx(-norm(eye))


def test_translation_and_linear_transform():
    t = vector(1.0, -2.0, 3.5)
    m = translation_matrix(t)
    p = vector(0.25, 0.5, 0.75)
    assert_close(affine_transform(m, p), p + t)
    assert_close(linear_transform(m, p), p)


def test_scaling_scalar_and_vector():
    p = vector(1.0, 2.0, 3.0)
    assert_close(affine_transform(scaling_matrix(2.0), p), p * 2.0)
    s = vector(2.0, 3.0, 4.0)
    assert_close(affine_transform(scaling_matrix(s), p), vector(2.0, 6.0, 12.0))


@pytest.mark.parametrize("angle", [0.0, 30.0, 90.0, 217.0])
def test_axis_rotation_matches_specific_rotations(angle):
    assert_close(rotation_matrix(vector(2.0, 0.0, 0.0), angle), rotation_matrix_x(angle))
    assert_close(rotation_matrix(vector(0.0, 1.0, 0.0), angle), rotation_matrix_y(angle))
    assert_close(rotation_matrix(vector(0.0, 0.0, 5.0), angle), rotation_matrix_z(angle))


def test_rotation_is_orthonormal():
    r = linear_part(rotation_matrix(vector(1.0, 2.0, 3.0), 47.0))
    assert_close(transpose(r) @ r, Matrix.identity(3))
    assert determinant(r) == pytest.approx(1.0)


def test_quaternion_matches_axis_angle():
    angle = 70.0
    half = math.radians(angle) / 2.0
    axis = vector(1.0, 1.0, 0.0)
    axis.normalize()
    quat = vector(axis * math.sin(half), math.cos(half))
    assert_close(quaternion_rotation_matrix(quat), rotation_matrix(axis, angle))


def test_linear_part_extracts_upper_block():
    m = rotation_matrix_z(30.0) @ translation_matrix(vector(1.0, 2.0, 3.0))
    lp = linear_part(m)
    assert lp.shape == (3, 3)
    assert_close(lp, linear_part(rotation_matrix_z(30.0)))


def test_inverse_4x4_round_trip():
    m = (translation_matrix(vector(1.0, -2.0, 0.5))
         @ rotation_matrix(vector(0.3, 1.0, -0.2), 33.0)
         @ scaling_matrix(vector(2.0, 0.5, 3.0)))
    assert_close(inverse(m) @ m, Matrix.identity(4))
    assert_close(m @ inverse(m), Matrix.identity(4))


def test_inverse_3x3_round_trip():
    m = Matrix.from_rows([[2.0, 1.0, 0.0], [1.0, 3.0, 1.0], [0.0, 1.0, 4.0]])
    assert_close(inverse(m) @ m, Matrix.identity(3))


def test_inverse_3x3_singular_raises():
    m = Matrix.from_rows([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [0.0, 1.0, 1.0]])
    with pytest.raises(SolverException):
        inverse(m)


def test_inverse_rejects_other_shapes():
    with pytest.raises(ValueError):
        inverse(Matrix.identity(2))


def test_determinant_of_identity():
    assert determinant(Matrix.identity(3)) == 1.0


def test_eigendecomposition_reconstructs_matrix():
    m = Matrix.from_rows([[4.0, 1.0, 2.0], [1.0, 3.0, 0.5], [2.0, 0.5, 5.0]])
    ed = symmetric_eigendecomposition(m)
    assert isinstance(ed, EigenDecomposition)
    values = ed.eigenvalues
    assert values[0] >= values[1] >= values[2]
    for lam, vec in zip(values, ed.eigenvectors):
        assert norm(vec) == pytest.approx(1.0)
        assert_close(m @ vec, vec * lam, tol=1e-7)
    v1, v2, v3 = ed.eigenvectors
    assert dot(v1, v2) == pytest.approx(0.0, abs=1e-9)
    assert dot(v1, v3) == pytest.approx(0.0, abs=1e-9)


def test_eigendecomposition_of_diagonal_sorts_descending():
    m = Matrix.from_rows([[1.0, 0.0, 0.0], [0.0, 7.0, 0.0], [0.0, 0.0, 3.0]])
    ed = symmetric_eigendecomposition(m)
    assert ed.eigenvalues == (7.0, 3.0, 1.0)
    assert_close(ed.eigenvectors[0], vector(0.0, 1.0, 0.0))
    assert_close(ed.eigenvectors[1], vector(0.0, 0.0, 1.0))