import math

import pytest

from democollection.linalg import Vector, identity, length, transpose
from democollection.position import Position


def _approx(v):
    return pytest.approx(list(v), abs=1e-9)


def test_reset_state():
    p = Position()
    p.move(Vector(1, 2, 3))
    p.turn_right(0.5)
    p.scale_x(4)
    p.reset()
    assert p.position == Vector.filled(3, 0)
    assert p.rotation == Vector.filled(3, 0)
    assert p.scale == Vector.filled(3, 1)


def test_move_forward_without_rotation_goes_along_z():
    p = Position()
    p.move_forward(2.0)
    assert list(p.position) == _approx([0.0, 0.0, 2.0])


def test_move_forward_and_backward_cancel():
    p = Position()
    p.turn_right(0.7)
    p.move_forward(3.0)
    p.move_backward(3.0)
    assert list(p.position) == _approx([0, 0, 0])


def test_move_right_and_left_cancel():
    p = Position()
    p.turn_left(1.1)
    p.move_right(2.5)
    assert length(p.position) == pytest.approx(2.5)
    p.move_left(2.5)
    assert list(p.position) == _approx([0, 0, 0])


def test_move_right_is_perpendicular_to_forward():
    p = Position()
    p.turn_right(0.4)
    p.move_right(1.0)
    right = Vector(p.position)
    q = Position()
    q.turn_right(0.4)
    q.move_forward(1.0)
    assert sum(a * b for a, b in zip(right, q.position)) == pytest.approx(0.0, abs=1e-12)


def test_move_up_down():
    p = Position()
    p.move_up(5)
    assert p.position[1] == 5
    p.move_down(2)
    assert p.position[1] == 3


def test_rotation_helpers_are_inverse_pairs():
    p = Position()
    p.look_down(0.3)
    p.turn_right(0.2)
    p.roll_right(0.1)
    p.look_up(0.3)
    p.turn_left(0.2)
    p.roll_left(0.1)
    assert list(p.rotation) == _approx([0, 0, 0])


def test_scaling():
    p = Position()
    p.scale_x(2)
    p.scale_y(3)
    p.scale_z(4)
    assert p.scale == Vector(2, 3, 4)


def test_look_direction_default_and_unit_length():
    p = Position()
    assert list(p.look_direction()) == _approx([0, 0, 1])
    p.look_down(0.4)
    p.turn_right(1.3)
    assert length(p.look_direction()) == pytest.approx(1.0)


def test_move_in_look_direction_scalar_matches_look_direction():
    p = Position()
    p.turn_right(0.6)
    p.look_down(0.2)
    p.move_in_look_direction(2.0)
    assert list(p.position) == _approx(p.look_direction() * 2.0)


def test_position_matrix_inverse():
    p = Position()
    p.move(Vector(1.5, -2.0, 3.0))
    m = p.position_matrix() * p.position_matrix_inv()
    assert list(m.values) == _approx(identity(4).values)


def test_rotation_matrix_inverse_is_transpose():
    p = Position()
    p.rotation = Vector(0.3, -0.5, 0.9)
    assert p.rotation_matrix_inv() == transpose(p.rotation_matrix())
    m = p.rotation_matrix_inv3x3() * p.rotation_matrix3x3()
    assert list(m.values) == _approx(identity(3).values)


def test_scale_matrix_inverse():
    p = Position()
    p.scale = Vector(2.0, 4.0, 0.5)
    m = p.scale_matrix() * p.scale_matrix_inv()
    assert list(m.values) == _approx(identity(4).values)
    m3 = p.scale_matrix3x3() * p.scale_matrix_inv3x3()
    assert list(m3.values) == _approx(identity(3).values)


def test_world_matrix_inverse():
    p = Position()
    p.position = Vector(1.0, 2.0, -3.0)
    p.rotation = Vector(0.2, 0.7, -0.4)
    p.scale = Vector(2.0, 0.5, 1.5)
    m = p.world_matrix_inv() * p.world_matrix()
    assert list(m.values) == _approx(identity(4).values)


def test_distance():
    a = Position()
    b = Position()
    b.move(Vector(1.0, -2.0, 2.5))
    assert a.distance(b) ** 2 == pytest.approx(a.distance_square(b))
    assert a.distance(b) == pytest.approx(b.distance(a))
    assert a.distance(a) == 0
    assert math.isclose(a.distance(b), length(b.position))