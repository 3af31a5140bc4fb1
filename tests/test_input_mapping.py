"""Tests for pointer-to-target mapping with falloff."""
import pytest

from bezier_core.chain import BezierChain, create_chain
from bezier_core.input_mapping import apply_pointer, falloff


@pytest.mark.parametrize("index, count, expected", [
    (0, 3, 0.0),
    (1, 3, 1.0),
    (2, 3, 0.0),
    (1, 5, 0.5),
    (0, 1, 1.0),
])
def test_falloff(index, count, expected):
    assert falloff(index, count) == pytest.approx(expected)


def test_pointer_at_center_targets_rest_layout(chain):
    apply_pointer(chain, 150, 50)
    for i, curve in enumerate(chain.curves):
        assert curve.p1.target.as_tuple() == pytest.approx(chain.rest_position(i, 1).as_tuple())
        assert curve.p2.target.as_tuple() == pytest.approx(chain.rest_position(i, 2).as_tuple())


def test_pointer_offsets_with_falloff(chain):
    # offset_x = (250 - 150) * 0.3 = 30, offset_y = (90 - 50) * 0.5 = 20
    apply_pointer(chain, 250, 90)

    middle = chain.curves[1]
    assert middle.p1.target.as_tuple() == pytest.approx((163.0, 66.0))
    assert middle.p2.target.as_tuple() == pytest.approx((197.0, 74.0))

    left = chain.curves[0]
    assert left.p1.target.as_tuple() == pytest.approx((33.0, 66.0))
    assert left.p2.target.as_tuple() == pytest.approx((67.0, 74.0))


def test_endpoints_are_not_targeted(chain):
    apply_pointer(chain, 10, 10)
    for curve in chain.curves:
        assert curve.p0.target == curve.p0.position
        assert curve.p3.target == curve.p3.position


def test_repeated_pointer_moves_do_not_accumulate(chain):
    apply_pointer(chain, 250, 90)
    first = [c.p1.target for c in chain.curves]
    apply_pointer(chain, 250, 90)
    assert [c.p1.target for c in chain.curves] == first


def test_targets_only_move_on_update(chain, config):
    before = [p.position for p in chain.control_points()]
    apply_pointer(chain, 0, 0)
    assert [p.position for p in chain.control_points()] == before

    chain.update(config)
    assert [p.position for p in chain.control_points()] != before


def test_empty_chain_is_ignored():
    apply_pointer(BezierChain(), 10, 10)


def test_single_curve_gets_full_pull():
    chain = create_chain(1, 200, 100)
    apply_pointer(chain, 200, 50)
    # offset_x = (200 - 100) * 0.3 = 30 at full strength
    assert chain.curves[0].p1.target.x == pytest.approx(200 * 0.33 + 30)
