import math

import pytest

from meshgeom.matrix import dot, norm, normalize, vector
from meshgeom.normal_cone import NormalCone


def test_default_angle_is_zero():
    cone = NormalCone(vector(0.0, 0.0, 1.0))
    assert cone.angle == 0.0
    assert cone.center_normal == vector(0.0, 0.0, 1.0)


def test_center_normal_is_copied():
    n = vector(0.0, 0.0, 1.0)
    cone = NormalCone(n)
    n[0] = 5.0
    assert cone.center_normal == vector(0.0, 0.0, 1.0)


def test_same_direction_keeps_larger_angle():
    cone = NormalCone(vector(0.0, 0.0, 1.0), 0.1)
    result = cone.merge(NormalCone(vector(0.0, 0.0, 1.0), 0.3))
    assert result is cone
    assert cone.angle == 0.3
    assert cone.center_normal == vector(0.0, 0.0, 1.0)


def test_opposite_direction_gives_full_angle():
    cone = NormalCone(vector(0.0, 0.0, 1.0))
    cone.merge(vector(0.0, 0.0, -1.0))
    assert cone.angle == pytest.approx(2.0 * math.pi)


def test_perpendicular_normals():
    cone = NormalCone(vector(1.0, 0.0, 0.0))
    cone.merge(vector(0.0, 1.0, 0.0))
    assert cone.angle == pytest.approx(math.pi / 4.0)
    assert cone.center_normal[0] == pytest.approx(cone.center_normal[1])
    assert norm(cone.center_normal) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "normals",
    [
        [vector(1.0, 0.0, 0.0), vector(0.0, 1.0, 0.0), vector(0.0, 0.0, 1.0)],
        [vector(0.0, 0.0, 1.0), vector(0.3, 0.0, 1.0), vector(0.0, -0.4, 1.0)],
    ],
)
def test_merged_cone_encloses_all_normals(normals):
    units = [normalize(n) for n in normals]
    cone = NormalCone(units[0])
    for n in units[1:]:
        cone.merge(n)
    center = normalize(cone.center_normal)
    for n in units:
        between = math.acos(max(-1.0, min(1.0, dot(center, n))))
        assert between <= cone.angle + 1e-9