"""Tests for the shared SimulationController (no display needed)."""
import pytest

from bezier_core.constants import FRAME_DT, MAX_STEPS_PER_FRAME
from bezier_core.presets_loader import BUILTIN_PRESETS
from bezier_sim import SimulationController


@pytest.fixture
def sim():
    """Controller over a 300x100 canvas with the default three segments."""
    return SimulationController(300, 100, presets=BUILTIN_PRESETS)


class TestStepping:

    def test_long_stall_is_capped(self, sim):
        assert sim.step_physics(1.0) == MAX_STEPS_PER_FRAME == 5
        # The rest of the stalled second is dropped, not replayed
        assert sim.step_physics(0.0) == 0

    def test_whole_ticks_are_taken(self, sim):
        assert sim.step_physics(FRAME_DT * 2) == 2

    def test_partial_ticks_accumulate(self, sim):
        assert sim.step_physics(FRAME_DT / 2) == 0
        assert sim.step_physics(FRAME_DT / 2) == 1

    def test_negative_elapsed_time_is_ignored(self, sim):
        assert sim.step_physics(-1.0) == 0
        assert sim.step_physics(FRAME_DT) == 1


class TestPointer:

    def test_pointer_waits_for_next_step(self, sim):
        sim.set_pointer(250, 90)
        assert sim.chain.curves[1].p1.target.as_tuple() == pytest.approx((133.0, 50.0))

        assert sim.step_physics(0.0) == 0
        assert sim.chain.curves[1].p1.target.as_tuple() == pytest.approx((163.0, 66.0))
        assert sim.chain.curves[1].p1.position.as_tuple() == pytest.approx((133.0, 50.0))

    def test_pointer_applied_before_ticks(self, sim):
        sim.set_pointer(250, 90)
        sim.step_physics(FRAME_DT)

        # One tick from rest: velocity = k * (target - position), position += velocity
        p1 = sim.chain.curves[1].p1
        assert p1.position.as_tuple() == pytest.approx((133.0 + 0.15 * 30, 50.0 + 0.15 * 16))


class TestConfiguration:

    def test_segment_count_change_rebuilds_chain(self, sim):
        assert sim.update_config(segment_count=5)
        assert len(sim.chain) == 5
        assert sim.chain.curves[-1].p3.position.x == pytest.approx(300.0)

    def test_other_changes_keep_chain(self, sim):
        chain = sim.chain
        assert sim.update_config(damping=0.9, show_tangents=False)
        assert sim.chain is chain
        assert sim.config.damping == 0.9

    @pytest.mark.parametrize("changes", [
        {"segment_count": 0},
        {"tangent_length": "40"},
        {"stiffness": 0.2},
    ])
    def test_rejected_settings_are_reported(self, sim, changes):
        before = sim.config
        assert not sim.update_config(**changes)
        assert sim.config is before
        assert sim.last_status_msg.startswith("Rejected")

    def test_toggle_flips_flag(self, sim):
        assert sim.toggle("show_tangents") is False
        assert sim.config.show_tangents is False
        assert sim.toggle("show_tangents") is True


class TestPresets:

    def test_apply_preset(self, sim):
        preset = sim.apply_preset(2)

        assert preset is BUILTIN_PRESETS[2]
        assert (sim.config.spring_stiffness, sim.config.damping) == (0.35, 0.95)
        assert sim.last_status_msg == "Preset: Stiff"

    @pytest.mark.parametrize("index", [-1, 4, 99])
    def test_out_of_range_preset_is_ignored(self, sim, index):
        before = sim.config
        assert sim.apply_preset(index) is None
        assert sim.config is before


class TestResizeAndReset:

    def test_resize_rebuilds_over_new_canvas(self, sim):
        sim.resize(600, 200)

        assert (sim.chain.width, sim.chain.height) == (600.0, 200.0)
        assert sim.chain.curves[-1].p3.position.as_tuple() == pytest.approx((600.0, 100.0))

    @pytest.mark.parametrize("size", [(300, 100), (0, 100), (300, -1)])
    def test_resize_no_op(self, sim, size):
        chain = sim.chain
        sim.resize(*size)
        assert sim.chain is chain

    def test_reset_returns_to_rest_layout(self, sim):
        sim.set_pointer(0, 0)
        sim.step_physics(FRAME_DT * 3)
        sim.reset()

        assert sim.last_status_msg == "Simulation reset."
        for p in sim.chain.control_points():
            assert p.position.y == pytest.approx(50.0)
            assert p.target == p.position


class TestSnapshot:

    def test_snapshot_contents(self, sim):
        snap = sim.snapshot()

        assert [len(c) for c in snap.curves] == [101, 101, 101]
        assert [len(t) for t in snap.tangents] == [10, 10, 10]
        assert len(snap.polygons) == 3
        kinds = [kind for _, kind in snap.points]
        assert kinds.count("fixed") == 2
        assert kinds.count("junction") == 2
        assert kinds.count("control") == 6

    def test_hidden_layers_are_not_sampled(self, sim):
        sim.update_config(show_tangents=False, show_control_points=False)
        snap = sim.snapshot()

        assert snap.tangents == []
        assert snap.polygons == [] and snap.points == []
