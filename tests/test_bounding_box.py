import pytest

from meshgeom.bounding_box import BoundingBox
from meshgeom.matrix import distance, vector


def test_default_box_is_empty_with_zero_size():
    bb = BoundingBox()
    assert bb.is_empty()
    assert bb.size() == 0.0


def test_single_point_gives_degenerate_box():
    bb = BoundingBox()
    bb += vector(1.0, 2.0, 3.0)
    assert bb.min_point == vector(1.0, 2.0, 3.0)
    assert bb.max_point == vector(1.0, 2.0, 3.0)
    assert not bb.is_empty()
    assert bb.size() == 0.0


def test_points_extend_corners():
    bb = BoundingBox()
    for p in (vector(0.0, 5.0, -1.0), vector(2.0, -3.0, 4.0), vector(1.0, 1.0, 1.0)):
        bb += p
    assert bb.min_point == vector(0.0, -3.0, -1.0)
    assert bb.max_point == vector(2.0, 5.0, 4.0)


def test_center_is_midpoint():
    bb = BoundingBox(vector(0.0, 0.0, 0.0), vector(2.0, 4.0, 6.0))
    assert bb.center() == vector(1.0, 2.0, 3.0)


def test_size_is_diagonal_length():
    bb = BoundingBox(vector(0.0, 0.0, 0.0), vector(3.0, 4.0, 0.0))
    assert bb.size() == pytest.approx(5.0)
    assert bb.size() == pytest.approx(distance(bb.max_point, bb.min_point))


def test_merging_boxes_encloses_both():
    a = BoundingBox(vector(0.0, 0.0, 0.0), vector(1.0, 1.0, 1.0))
    b = BoundingBox(vector(-1.0, 0.5, 0.5), vector(0.5, 2.0, 0.7))
    a += b
    assert a.min_point == vector(-1.0, 0.0, 0.0)
    assert a.max_point == vector(1.0, 2.0, 1.0)


def test_add_does_not_modify_operands():
    a = BoundingBox(vector(0.0, 0.0, 0.0), vector(1.0, 1.0, 1.0))
    merged = a + vector(5.0, 5.0, 5.0)
    assert a.max_point == vector(1.0, 1.0, 1.0)
    assert merged.max_point == vector(5.0, 5.0, 5.0)


def test_adding_empty_box_changes_nothing():
    a = BoundingBox(vector(0.0, 0.0, 0.0), vector(1.0, 1.0, 1.0))
    a += BoundingBox()
    assert a == BoundingBox(vector(0.0, 0.0, 0.0), vector(1.0, 1.0, 1.0))


def test_inverted_box_is_empty():
    bb = BoundingBox(vector(0.0, 1.0, 0.0), vector(1.0, 0.0, 1.0))
    assert bb.is_empty()
    assert bb.size() == 0.0


def test_single_corner_is_rejected():
    with pytest.raises(ValueError):
        BoundingBox(vector(0.0, 0.0, 0.0))