"""Tests for the Vector2D value type and clamp."""
import dataclasses

import pytest

from bezier_core.vector_utils import Vector2D, ZERO, clamp


def test_arithmetic_returns_new_values():
    a = Vector2D(1.0, 2.0)
    b = Vector2D(3.0, -5.0)

    assert a.add(b) == Vector2D(4.0, -3.0)
    assert a.subtract(b) == Vector2D(-2.0, 7.0)
    assert a.scale(-2.0) == Vector2D(-2.0, -4.0)
    assert a.dot(b) == pytest.approx(-7.0)

    # Operands are untouched
    assert a == Vector2D(1.0, 2.0)
    assert b == Vector2D(3.0, -5.0)


def test_vectors_are_immutable():
    v = Vector2D(1.0, 1.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.x = 5.0


def test_equal_coordinates_are_interchangeable():
    assert Vector2D(2.0, 3.0) == Vector2D(2.0, 3.0)
    assert len({Vector2D(2.0, 3.0), Vector2D(2.0, 3.0)}) == 1


def test_magnitude_and_normalize():
    v = Vector2D(3.0, 4.0)
    assert v.magnitude() == pytest.approx(5.0)

    unit = v.normalize()
    assert unit.as_tuple() == pytest.approx((0.6, 0.8))
    assert unit.magnitude() == pytest.approx(1.0)


def test_normalize_zero_vector_is_zero():
    """No division by zero for degenerate tangents."""
    assert Vector2D(0.0, 0.0).normalize() == ZERO


def test_normalize_below_epsilon_is_zero():
    assert Vector2D(1e-12, -1e-12).normalize() == ZERO


@pytest.mark.parametrize("x, expected", [(-1.0, 0.0), (0.5, 0.5), (3.0, 1.0)])
def test_clamp(x, expected):
    assert clamp(x, 0.0, 1.0) == expected
