"""Tests for the idle stabilizer, momentum and hover components in isolation."""

import numpy as np
import pytest

from touchcam.camera.hover import HoverOscillator, HoverState
from touchcam.camera.momentum import MomentumOscillator, MomentumState
from touchcam.camera.settings import InvertSettings
from touchcam.camera.stabilizer import IdleStabilizer, StabilizationState, StabilizerPhase
from touchcam.scene.transform import Transform


def tilted_transform(pitch=30.0, yaw=45.0, roll=10.0):
    transform = Transform(position=(3.0, 40.0, -7.0))
    transform.set_euler_angles(pitch, yaw, roll)
    return transform


class TestIdleStabilizer:

    def test_first_step_schedules(self, make_settings):
        stabilizer = IdleStabilizer(make_settings(stabilization_delay=0.5))
        state = StabilizationState()
        transform = tilted_transform()
        before = transform.get_world_rotation()

        phase = stabilizer.step(transform, state, now=2.0, dt=0.1)

        assert phase is StabilizerPhase.WAITING
        assert state.should_stabilize
        assert state.stabilization_start_time == pytest.approx(2.0)
        assert np.allclose(transform.get_world_rotation(), before)

    def test_target_is_upright(self, make_settings):
        stabilizer = IdleStabilizer(make_settings())
        state = StabilizationState()
        stabilizer.step(tilted_transform(), state, now=0.0, dt=0.1)

        target = Transform(rotation=state.target_rotation)
        assert target.pitch == pytest.approx(0.0, abs=1e-3)
        assert target.roll == pytest.approx(0.0, abs=1e-3)
        assert target.yaw == pytest.approx(45.0, abs=1e-3)

    def test_waits_for_delay(self, make_settings):
        stabilizer = IdleStabilizer(make_settings(stabilization_delay=0.5))
        state = StabilizationState()
        transform = tilted_transform()
        before = transform.get_world_rotation()

        stabilizer.step(transform, state, now=1.0, dt=0.1)
        assert stabilizer.step(transform, state, now=1.3, dt=0.1) is StabilizerPhase.WAITING
        assert np.allclose(transform.get_world_rotation(), before)

        assert stabilizer.step(transform, state, now=1.6, dt=0.1) is StabilizerPhase.STABILIZING
        assert transform.pitch < 30.0

    def test_levels_without_moving(self, make_settings):
        stabilizer = IdleStabilizer(make_settings(stabilization_delay=0.0, stabilization_speed=5.0))
        state = StabilizationState()
        transform = tilted_transform()
        position = transform.get_world_position()

        now = 0.0
        for _ in range(200):
            stabilizer.step(transform, state, now=now, dt=0.1)
            now += 0.1

        assert transform.pitch == pytest.approx(0.0, abs=0.05)
        assert transform.roll == pytest.approx(0.0, abs=0.05)
        assert np.allclose(transform.get_world_position(), position)

    def test_reset_rearms(self, make_settings):
        stabilizer = IdleStabilizer(make_settings())
        state = StabilizationState()
        stabilizer.step(tilted_transform(), state, now=0.0, dt=0.1)

        stabilizer.reset(state)
        assert not state.should_stabilize
        assert stabilizer.phase(state, now=100.0) is StabilizerPhase.ARMED


class TestMomentum:

    def test_disarmed_does_nothing(self, make_settings):
        momentum = MomentumOscillator(make_settings(direction_change_speed=5.0))
        transform = tilted_transform()
        before = transform.get_world_rotation()

        assert not momentum.step(transform, MomentumState(), 0.1)
        assert np.allclose(transform.get_world_rotation(), before)

    @pytest.mark.parametrize("saved, expected_yaw", [(4.0, 2.5), (-4.0, 357.5)])
    def test_blends_toward_step(self, make_settings, saved, expected_yaw):
        """Half of a 5 degree step when speed * dt = 0.5."""
        settings = make_settings(continuous_direction_change_angle=5.0, direction_change_speed=5.0)
        momentum = MomentumOscillator(settings)
        state = MomentumState()
        momentum.arm(state, saved)
        transform = Transform()

        assert momentum.step(transform, state, 0.1)
        assert transform.yaw == pytest.approx(expected_yaw, abs=0.01)

    def test_keeps_spinning(self, make_settings):
        settings = make_settings(continuous_direction_change_angle=5.0, direction_change_speed=10.0)
        momentum = MomentumOscillator(settings)
        state = MomentumState()
        momentum.arm(state, 1.0)
        transform = Transform()

        for _ in range(4):
            momentum.step(transform, state, 0.1)
        assert transform.yaw == pytest.approx(20.0, abs=0.01)

    def test_inverted_direction(self, make_settings):
        settings = make_settings(continuous_direction_change_angle=5.0, direction_change_speed=10.0,
                                 invert_settings=InvertSettings.DIRECTION_CHANGE)
        momentum = MomentumOscillator(settings)
        state = MomentumState()
        momentum.arm(state, 3.0)
        transform = Transform()

        momentum.step(transform, state, 0.1)
        assert transform.yaw == pytest.approx(355.0, abs=0.01)

    def test_disarm(self, make_settings):
        momentum = MomentumOscillator(make_settings())
        state = MomentumState()
        momentum.arm(state, 2.0)
        momentum.disarm(state)
        assert not state.continuous_direction_change


class TestHover:

    def test_target_height(self, make_settings):
        hover = HoverOscillator(make_settings(hover_amplitude=2.0, hover_frequency=1.0))
        state = HoverState(baseline_height=50.0)

        assert hover.target_height(state, np.pi / 2) == pytest.approx(52.0)
        assert hover.target_height(state, 0.0) == pytest.approx(50.0)
        assert hover.target_height(state, 3 * np.pi / 2) == pytest.approx(48.0)

    def test_phase_depends_only_on_elapsed(self, make_settings):
        hover = HoverOscillator(make_settings(hover_amplitude=2.0, hover_frequency=3.0))
        state = HoverState(baseline_height=50.0)
        assert hover.target_height(state, 7.25) == pytest.approx(hover.target_height(state, 7.25))
        assert hover.target_height(state, 7.25) == pytest.approx(50.0 + 2.0 * np.sin(7.25 * 3.0))

    def test_approaches_peak_monotonically(self, make_settings):
        """Starting at the baseline, height climbs toward 52 without overshooting."""
        settings = make_settings(hover_amplitude=2.0, hover_frequency=1.0, hover_smoothness=5.0)
        hover = HoverOscillator(settings)
        state = HoverState(baseline_height=50.0)
        transform = Transform(position=(0.0, 50.0, 0.0))

        heights = [hover.step(transform, state, np.pi / 2, 0.05) for _ in range(60)]

        assert all(b >= a for a, b in zip(heights, heights[1:]))
        assert max(heights) <= 52.0 + 1e-4
        assert heights[-1] == pytest.approx(52.0, abs=1e-3)

    def test_large_dt_does_not_overshoot(self, make_settings):
        hover = HoverOscillator(make_settings(hover_amplitude=2.0, hover_smoothness=5.0))
        transform = Transform(position=(0.0, 50.0, 0.0))
        hover.step(transform, HoverState(50.0), np.pi / 2, 10.0)
        assert transform.height == pytest.approx(52.0)

    def test_target_respects_height_limits(self, make_settings):
        settings = make_settings(hover_amplitude=20.0, hover_smoothness=1000.0, max_y=60.0)
        hover = HoverOscillator(settings)
        transform = Transform(position=(0.0, 55.0, 0.0))
        hover.step(transform, HoverState(55.0), np.pi / 2, 1.0)
        assert transform.height == pytest.approx(60.0)

    def test_only_height_changes(self, make_settings):
        hover = HoverOscillator(make_settings(hover_amplitude=2.0, hover_smoothness=1.0))
        transform = Transform(position=(12.0, 50.0, -4.0))
        rotation = transform.get_world_rotation()
        hover.step(transform, HoverState(50.0), 1.0, 0.1)

        position = transform.get_world_position()
        assert position[0] == pytest.approx(12.0)
        assert position[2] == pytest.approx(-4.0)
        assert np.allclose(transform.get_world_rotation(), rotation)
