# touchcam/camera/momentum.py

from dataclasses import dataclass
from touchcam.camera.settings import CameraSettings, InvertSettings
from touchcam.core.logging import get_logger
from touchcam.scene.transform import Transform
from touchcam.utils.math import WORLD_UP, clamp01, quaternion_nlerp

logger = get_logger()


@dataclass
class MomentumState:
    continuous_direction_change: bool = False
    saved_rotation_y_delta: float = 0.0


class MomentumOscillator:
    """Keeps spinning in the direction of the last horizontal swipe."""

    def __init__(self, settings: CameraSettings):
        self.settings = settings

    def arm(self, state: MomentumState, rotation_y: float):
        if not state.continuous_direction_change:
            logger.debug(f"Momentum armed ({'+' if rotation_y > 0 else '-'})")
        state.continuous_direction_change = True
        state.saved_rotation_y_delta = rotation_y

    def disarm(self, state: MomentumState):
        state.continuous_direction_change = False

    def direction(self, state: MomentumState) -> float:
        sign = 1.0 if state.saved_rotation_y_delta > 0 else -1.0
        return sign * self.settings.invert_settings.sign(InvertSettings.DIRECTION_CHANGE)

    def step(self, transform: Transform, state: MomentumState, dt: float) -> bool:
        """Blend part of the way toward a fixed yaw step. Returns True if applied."""
        if not state.continuous_direction_change:
            return False

        saved_rotation = transform.get_world_rotation()
        transform.rotate(WORLD_UP, self.direction(state) * self.settings.continuous_direction_change_angle)
        stepped_rotation = transform.get_world_rotation()

        t = clamp01(dt * self.settings.direction_change_speed)
        transform.set_world_rotation(quaternion_nlerp(saved_rotation, stepped_rotation, t))
        return True
