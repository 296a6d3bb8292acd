"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path

import numpy as np
import pytest

from touchcam.core.logging import init_logger

# Controller modules bind the global logger at import; point it away from ./logs first
_LOG_DIR = tempfile.mkdtemp(prefix="touchcam-test-logs-")
init_logger(log_dir=_LOG_DIR)

from touchcam.camera.camera import Camera  # noqa: E402
from touchcam.camera.settings import CameraSettings  # noqa: E402
from touchcam.camera.touch_camera import TouchCameraController  # noqa: E402
from touchcam.input.input_state import InputSample, Touch, TouchPhase  # noqa: E402
from touchcam.scene.transform import Transform  # noqa: E402


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_LOG_DIR, ignore_errors=True)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_settings():
    """
    Settings factory.
    Hover and momentum are inert unless a test turns them on, so each
    motion can be checked on its own.
    """
    def factory(**overrides):
        values = dict(
            hover_smoothness=0.0,
            direction_change_speed=0.0,
            touch_sensitivity=10.0,
            rotation_speed_horizontal=1.0,
            camera_speed=10.0,
            zoom_speed=1.0,
            min_y=10.0,
            max_y=80.0,
        )
        values.update(overrides)
        return CameraSettings(**values)
    return factory


@pytest.fixture
def make_controller(make_settings):
    """Controller over a camera at (0, 50, 0), level, 1280x720 screen."""
    def factory(settings=None, position=(0.0, 50.0, 0.0), euler=(0.0, 0.0, 0.0), **overrides):
        if settings is None:
            settings = make_settings(**overrides)
        transform = Transform(position=position)
        transform.set_euler_angles(*euler)
        camera = Camera(transform, screen_width=1280, screen_height=720)
        return TouchCameraController(camera, settings)
    return factory


@pytest.fixture
def touch():
    """Touch factory: touch((x, y), delta=(dx, dy), phase=..., finger=...)."""
    def factory(position, delta=(0.0, 0.0), phase=TouchPhase.MOVED, finger=0):
        return Touch(finger, (float(position[0]), float(position[1])),
                     (float(delta[0]), float(delta[1])), phase)
    return factory


@pytest.fixture
def single(touch):
    """One-touch sample at a position."""
    def factory(position, delta=(0.0, 0.0), phase=TouchPhase.MOVED):
        return InputSample.from_touches(touch(position, delta, phase))
    return factory


@pytest.fixture
def idle():
    return InputSample.idle()


@pytest.fixture
def rng():
    return np.random.RandomState(1234)
