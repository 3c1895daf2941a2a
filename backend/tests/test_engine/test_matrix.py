"""Tests for the affine matrix algebra."""

import math

import pytest

from plangeom.engine.matrix import (
    Matrix,
    compose,
    identity,
    multiply,
    rotate,
    scale,
    skew_x,
    skew_y,
    transform_point,
    translate,
)


ARBITRARY = [
    Matrix(2.0, 0.5, -0.25, 3.0, 10.0, -4.0),
    Matrix(-1.0, 0.0, 0.0, 1.0, 0.0, 0.0),
    rotate(33.0, 5.0, 7.0),
    skew_x(20.0),
]


@pytest.mark.parametrize("m", ARBITRARY)
def test_identity_is_neutral(m):
    assert multiply(identity(), m) == m
    assert multiply(m, identity()) == m


def test_transform_point_formula():
    m = Matrix(1, 2, 3, 4, 5, 6)
    assert transform_point((1, 1), m) == (1 * 1 + 1 * 3 + 5, 1 * 2 + 1 * 4 + 6)


def test_multiply_applies_right_operand_first():
    m = multiply(translate(10, 0), scale(2))
    # scale then translate
    assert transform_point((1, 1), m) == (12, 2)
    m = multiply(scale(2), translate(10, 0))
    assert transform_point((1, 1), m) == (22, 2)


def test_composition_is_associative():
    a, b, c = ARBITRARY[0], ARBITRARY[2], ARBITRARY[3]
    left = multiply(multiply(a, b), c)
    right = multiply(a, multiply(b, c))
    for u, v in zip(left.as_tuple(), right.as_tuple()):
        assert u == pytest.approx(v)


def test_composition_is_not_commutative():
    assert multiply(translate(5, 0), rotate(90)) != multiply(rotate(90), translate(5, 0))


def test_rotate_about_pivot_keeps_pivot_fixed():
    m = rotate(90, 10, 10)
    x, y = transform_point((10, 10), m)
    assert x == pytest.approx(10)
    assert y == pytest.approx(10)
    x, y = transform_point((20, 10), m)
    assert x == pytest.approx(10)
    assert y == pytest.approx(20)


def test_rotate_pivot_matches_translate_sandwich():
    expected = compose(translate(3, 4), rotate(30), translate(-3, -4))
    for u, v in zip(rotate(30, 3, 4).as_tuple(), expected.as_tuple()):
        assert u == pytest.approx(v)


def test_skew():
    assert skew_x(45).c == pytest.approx(1.0)
    assert skew_y(45).b == pytest.approx(1.0)


def test_predicates():
    assert not scale(2, 3).has_rotation_or_skew()
    assert rotate(10).has_rotation_or_skew()
    assert scale(2).is_uniform_scale()
    assert scale(-2, 2).is_uniform_scale()
    assert not scale(2, 3).is_uniform_scale()
    assert not rotate(90).is_uniform_scale()
    sx, sy = rotate(30).axis_scales()
    assert sx == pytest.approx(1.0)
    assert sy == pytest.approx(1.0)
    assert scale(2, 3).determinant == 6
    assert identity().is_identity()


def test_rotate_90_maps_x_axis_to_y_axis():
    x, y = transform_point((1, 0), rotate(90))
    assert x == pytest.approx(0, abs=1e-12)
    assert y == pytest.approx(1)
    assert math.isclose(rotate(90).a, 0, abs_tol=1e-12)
