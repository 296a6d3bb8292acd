# touchcam/camera/motion.py

from dataclasses import dataclass
from enum import Enum
import numpy as np
from touchcam.camera.settings import CameraSettings, InvertSettings
from touchcam.input.input_state import Touch
from touchcam.scene.transform import Transform
from touchcam.utils.math import WORLD_UP, clamp, distance


class SingleContactAction(Enum):
    ROTATE = "rotate"
    PAN_VERTICAL = "pan_vertical"
    PAN_PLANAR = "pan_planar"


@dataclass(frozen=True)
class SingleContactResult:
    action: SingleContactAction
    rotation_y: float = 0.0  # Signed yaw applied this frame (ROTATE only)


def rotate_horizontal(transform: Transform, delta_x: float, settings: CameraSettings, dt: float) -> float:
    """Yaw about world up. Returns the signed angle applied."""
    invert = settings.invert_settings.sign(InvertSettings.SWIPE_HORIZONTAL)
    rotation_y = invert * delta_x * settings.rotation_speed_horizontal * dt
    transform.rotate(WORLD_UP, rotation_y, world_space=True)
    return rotation_y


def move_height(transform: Transform, amount: float, settings: CameraSettings):
    """Shift height by `amount`, clamped to [min_y, max_y]."""
    transform.height = settings.clamp_height(transform.height + amount)


def pan_vertical(transform: Transform, delta_y: float, settings: CameraSettings, dt: float):
    invert = settings.invert_settings.sign(InvertSettings.SWIPE_VERTICAL)
    move_height(transform, invert * delta_y * settings.camera_speed * dt, settings)


def pan_planar(transform: Transform, delta: np.ndarray, settings: CameraSettings, dt: float):
    """Drag the ground plane under the finger, then keep X/Z inside the square."""
    invert = settings.invert_settings.sign(InvertSettings.MOVE)
    move = np.array([-delta[0], 0.0, -delta[1]], dtype=np.float64) * settings.camera_speed * dt * invert
    transform.translate(move)
    limit_planar_position(transform, settings)


def limit_planar_position(transform: Transform, settings: CameraSettings):
    position = transform.get_world_position()
    limit = settings.planar_limit
    position[0] = clamp(float(position[0]), -limit, limit)
    position[2] = clamp(float(position[2]), -limit, limit)
    transform.set_world_position(position)


def tilt(transform: Transform, angle_delta: float, settings: CameraSettings, dt: float) -> float:
    """Pitch by -angle_delta, clamped to [min_x_angle, max_x_angle]. Returns the new pitch."""
    invert = settings.invert_settings.sign(InvertSettings.TILT)
    pitch, yaw, roll = transform.euler_angles
    new_pitch = clamp(pitch - invert * angle_delta * settings.tilt_speed * dt,
                      settings.min_x_angle, settings.max_x_angle)
    transform.set_euler_angles(new_pitch, yaw, roll)
    return new_pitch


def pinch_delta(first: Touch, second: Touch) -> float:
    """
    Previous-frame distance minus current distance.
    Positive when the fingers come together.
    """
    previous = distance(np.asarray(first.previous_position), np.asarray(second.previous_position))
    current = distance(np.asarray(first.position), np.asarray(second.position))
    return previous - current


class SingleContactMapper:
    """
    One finger (or the held mouse) drag.
    Exactly one motion per frame; horizontal rotation wins ties.
    """

    def __init__(self, settings: CameraSettings):
        self.settings = settings

    def classify(self, delta: np.ndarray) -> SingleContactAction:
        if abs(delta[0]) > self.settings.touch_sensitivity:
            return SingleContactAction.ROTATE
        if abs(delta[1]) > self.settings.touch_sensitivity:
            return SingleContactAction.PAN_VERTICAL
        return SingleContactAction.PAN_PLANAR

    def apply(self, transform: Transform, delta: np.ndarray, dt: float) -> SingleContactResult:
        action = self.classify(delta)

        if action is SingleContactAction.ROTATE:
            rotation_y = rotate_horizontal(transform, float(delta[0]), self.settings, dt)
            return SingleContactResult(action, rotation_y)

        if action is SingleContactAction.PAN_VERTICAL:
            pan_vertical(transform, float(delta[1]), self.settings, dt)
        else:
            pan_planar(transform, delta, self.settings, dt)
        return SingleContactResult(action)


class MultiContactMapper:
    """Two-finger pinch mapped onto camera height."""

    def __init__(self, settings: CameraSettings):
        self.settings = settings

    def apply(self, transform: Transform, first: Touch, second: Touch, dt: float) -> float:
        """Returns the pinch delta that was applied."""
        delta = pinch_delta(first, second)
        move_height(transform, delta * self.settings.zoom_speed * dt, self.settings)
        return delta
