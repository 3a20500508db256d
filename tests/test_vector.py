import math

import pytest

from partee.vector import Color, Vector2, Vector3


def test_vector2_defaults_to_origin():
    assert Vector2() == Vector2(0, 0)


def test_vector2_add_sub_round_trip():
    a = Vector2(1.5, -2.0)
    b = Vector2(4.0, 3.25)
    assert (a + b) - b == a


def test_vector2_scalar_mul_and_div_round_trip():
    a = Vector2(3.0, -6.0)
    assert (a * 2.0) / 2.0 == a
    assert 2.0 * a == a * 2.0


def test_vector2_dot_is_symmetric_and_orthogonal():
    a = Vector2(1.0, 0.0)
    b = Vector2(0.0, 1.0)
    assert a.dot(b) == 0.0
    c = Vector2(2.0, 3.0)
    d = Vector2(-4.0, 5.0)
    assert c.dot(d) == d.dot(c)


def test_vector3_defaults_to_origin():
    assert Vector3() == Vector3(0, 0, 0)


def test_vector3_arithmetic_round_trips():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-4.0, 0.5, 6.0)
    assert (a + b) - b == a
    assert a * 2.0 == a + a
    assert (a * 4.0) / 4.0 == a
    assert 3.0 * a == a * 3.0


def test_vector3_negation():
    a = Vector3(1.0, -2.0, 3.0)
    assert -a == Vector3(-1.0, 2.0, -3.0)
    assert a + (-a) == Vector3()


def test_vector3_cross_of_unit_axes():
    x = Vector3(1, 0, 0)
    y = Vector3(0, 1, 0)
    assert x.cross(y) == Vector3(0, 0, 1)
    assert y.cross(x) == -Vector3(0, 0, 1)


def test_vector3_cross_is_orthogonal_to_inputs():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-2.0, 0.5, 4.0)
    c = a.cross(b)
    assert c.dot(a) == pytest.approx(0.0)
    assert c.dot(b) == pytest.approx(0.0)


def test_vector3_length_matches_squared_length():
    a = Vector3(2.0, -3.0, 6.0)
    assert a.length() ** 2 == pytest.approx(a.length_squared())
    assert a.length_squared() == a.dot(a)


def test_vector3_normalized_has_unit_length_and_same_direction():
    a = Vector3(2.0, -3.0, 6.0)
    n = a.normalized()
    assert n.length() == pytest.approx(1.0)
    assert n.cross(a).length() == pytest.approx(0.0)
    assert n.dot(a) > 0


def test_vector3_normalized_zero_is_zero():
    assert Vector3().normalized() == Vector3(0, 0, 0)


def test_vector3_component_mul_and_abs():
    a = Vector3(-1.0, 2.0, -3.0)
    assert a.component_mul(Vector3(1, 1, 1)) == a
    assert a.abs() == Vector3(1.0, 2.0, 3.0)
    assert a.component_mul(a) == a.abs().component_mul(a.abs())


def test_vector3_is_iterable():
    a = Vector3(1.0, 2.0, 3.0)
    assert tuple(a) == (1.0, 2.0, 3.0)
    assert math.sqrt(sum(c * c for c in a)) == pytest.approx(a.length())


def test_color_defaults_to_opaque_white():
    assert Color() == Color(1.0, 1.0, 1.0, 1.0)


def test_color_alpha_defaults_to_opaque():
    c = Color(0.5, 0.25, 0.125)
    assert (c.r, c.g, c.b, c.a) == (0.5, 0.25, 0.125, 1.0)