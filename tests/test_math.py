"""Tests for quaternion and scalar helpers."""

import numpy as np
import pytest

from touchcam.utils.math import (
    WORLD_UP,
    clamp,
    distance,
    quaternion_angle,
    quaternion_from_axis_angle,
    quaternion_from_euler,
    quaternion_multiply,
    quaternion_nlerp,
    quaternion_slerp,
    quaternion_to_euler,
    wrap_180,
    wrap_360,
)


class TestEuler:
    """Yaw-pitch-roll composition and decomposition."""

    @pytest.mark.parametrize("pitch, yaw, roll", [
        (0.0, 0.0, 0.0),
        (30.0, 45.0, 0.0),
        (-20.0, 170.0, 10.0),
        (60.0, -120.0, -35.0),
    ])
    def test_round_trip(self, pitch, yaw, roll):
        euler = quaternion_to_euler(quaternion_from_euler(pitch, yaw, roll))
        assert euler[0] == pytest.approx(pitch, abs=1e-3)
        assert wrap_180(euler[1] - yaw) == pytest.approx(0.0, abs=1e-3)
        assert wrap_180(euler[2] - roll) == pytest.approx(0.0, abs=1e-3)

    def test_world_yaw_adds_to_yaw(self):
        """Pre-multiplying a world-up rotation changes yaw only."""
        q = quaternion_from_euler(25.0, 40.0, 0.0)
        rotated = quaternion_multiply(quaternion_from_axis_angle(WORLD_UP, 15.0), q)
        pitch, yaw, roll = quaternion_to_euler(rotated)

        assert pitch == pytest.approx(25.0, abs=1e-3)
        assert yaw == pytest.approx(55.0, abs=1e-3)
        assert roll == pytest.approx(0.0, abs=1e-3)

    def test_zero_axis_is_identity(self):
        q = quaternion_from_axis_angle(np.zeros(3), 90.0)
        assert np.allclose(q, [0.0, 0.0, 0.0, 1.0])


class TestInterpolation:

    def test_slerp_endpoints(self):
        a = quaternion_from_euler(0.0, 0.0, 0.0)
        b = quaternion_from_euler(0.0, 90.0, 0.0)
        assert quaternion_angle(quaternion_slerp(a, b, 0.0), a) == pytest.approx(0.0, abs=0.1)
        assert quaternion_angle(quaternion_slerp(a, b, 1.0), b) == pytest.approx(0.0, abs=0.1)

    def test_slerp_constant_speed(self):
        a = quaternion_from_euler(0.0, 0.0, 0.0)
        b = quaternion_from_euler(0.0, 90.0, 0.0)
        mid = quaternion_slerp(a, b, 0.25)
        assert quaternion_angle(a, mid) == pytest.approx(22.5, abs=0.1)

    def test_nlerp_takes_short_path(self):
        a = quaternion_from_euler(0.0, 10.0, 0.0)
        b = -quaternion_from_euler(0.0, 20.0, 0.0)  # Same orientation, opposite hemisphere
        result = quaternion_nlerp(a, b, 0.5)
        assert quaternion_to_euler(result)[1] == pytest.approx(15.0, abs=0.1)
        assert np.linalg.norm(result) == pytest.approx(1.0, abs=1e-5)


class TestScalars:

    def test_wrap_360(self):
        assert wrap_360(370.0) == pytest.approx(10.0)
        assert wrap_360(-10.0) == pytest.approx(350.0)
        assert 0.0 <= wrap_360(-1e-20) < 360.0

    def test_wrap_180(self):
        assert wrap_180(190.0) == pytest.approx(-170.0)
        assert wrap_180(180.0) == pytest.approx(180.0)

    def test_clamp(self):
        assert clamp(5.0, 0.0, 1.0) == 1.0
        assert clamp(-5.0, 0.0, 1.0) == 0.0

    def test_distance_of_coincident_points(self):
        d = distance(np.array([3.0, 4.0]), np.array([3.0, 4.0]))
        assert d == 0.0
        assert np.isfinite(d)
