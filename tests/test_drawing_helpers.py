"""Tests for the display-free drawing helpers of the viewport."""
import math

import pytest

from bezier_core.constants import GRADIENT_STOPS, SAFE_COORD_LIMIT
from bezier_core.vector_utils import Vector2D
from bezier_sim import _safe_point, arrow_wings, gradient_color


def test_arrow_wings_sweep_back_thirty_degrees():
    wings = arrow_wings(Vector2D(10.0, 0.0), Vector2D(1.0, 0.0), 8)

    back = 10.0 - 8 * math.cos(math.pi / 6)
    assert sorted(w.as_tuple() for w in wings) == [
        pytest.approx((back, -4.0)),
        pytest.approx((back, 4.0)),
    ]


def test_arrow_wings_follow_direction():
    tip = Vector2D(5.0, 5.0)
    direction = Vector2D(0.0, 1.0)
    for wing in arrow_wings(tip, direction, 8):
        assert wing.subtract(tip).magnitude() == pytest.approx(8.0)
        assert wing.subtract(tip).dot(direction) == pytest.approx(-8 * math.cos(math.pi / 6))


def test_gradient_color_hits_end_stops():
    assert gradient_color(0.0) == GRADIENT_STOPS[0]
    assert gradient_color(1.0) == GRADIENT_STOPS[-1]
    assert gradient_color(2.0) == GRADIENT_STOPS[-1]


@pytest.mark.parametrize("pt", [
    (float("nan"), 0.0),
    (float("inf"), 0.0),
    (0.0, SAFE_COORD_LIMIT + 1),
    (None, 1),
])
def test_safe_point_rejects_unusable_coordinates(pt):
    assert _safe_point(pt) is None


def test_safe_point_truncates_to_ints():
    assert _safe_point((12.7, -3.2)) == (12, -3)
