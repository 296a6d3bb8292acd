# touchcam/camera/stabilizer.py

from dataclasses import dataclass, field
from enum import Enum
import numpy as np
from touchcam.camera.settings import CameraSettings
from touchcam.core.logging import get_logger
from touchcam.scene.transform import Transform
from touchcam.utils.math import IDENTITY_QUATERNION, clamp01, quaternion_from_euler, quaternion_slerp

logger = get_logger()

# Frame times are sums of float deltas; 0.1 * 5 must count as 0.5
_TIME_EPSILON = 1e-6


class StabilizerPhase(Enum):
    ARMED = "armed"
    WAITING = "waiting"
    STABILIZING = "stabilizing"


@dataclass
class StabilizationState:
    should_stabilize: bool = False
    stabilization_start_time: float = 0.0
    target_rotation: np.ndarray = field(default_factory=lambda: IDENTITY_QUATERNION.copy())
    is_stabilizing: bool = False


def upright_rotation(transform: Transform) -> np.ndarray:
    """Current yaw with pitch and roll zeroed."""
    return quaternion_from_euler(0.0, transform.yaw, 0.0)


class IdleStabilizer:
    """
    Levels the camera once the user has let go.

    ARMED -> WAITING on the first idle frame after a gesture, WAITING ->
    STABILIZING after `stabilization_delay` seconds. While stabilizing, each
    frame slerps toward the upright orientation. Position is never touched.
    """

    def __init__(self, settings: CameraSettings):
        self.settings = settings

    def phase(self, state: StabilizationState, now: float) -> StabilizerPhase:
        if not state.should_stabilize:
            return StabilizerPhase.ARMED
        if now - state.stabilization_start_time + _TIME_EPSILON >= self.settings.stabilization_delay:
            return StabilizerPhase.STABILIZING
        return StabilizerPhase.WAITING

    def step(self, transform: Transform, state: StabilizationState, now: float, dt: float) -> StabilizerPhase:
        if not state.should_stabilize:
            state.stabilization_start_time = now
            state.target_rotation = upright_rotation(transform)
            state.should_stabilize = True
            logger.debug(f"Stabilization scheduled at t={now:.3f}s (delay {self.settings.stabilization_delay}s)")
            return StabilizerPhase.WAITING

        phase = self.phase(state, now)
        if phase is not StabilizerPhase.STABILIZING:
            return phase

        if not state.is_stabilizing:
            state.is_stabilizing = True
            logger.debug(f"Stabilizing toward yaw {transform.yaw:.2f}")

        stored_position = transform.get_world_position()
        target = upright_rotation(transform)
        t = clamp01(self.settings.stabilization_speed * dt)
        transform.set_world_rotation(quaternion_slerp(transform.get_world_rotation(), target, t))
        transform.set_world_position(stored_position)
        return phase

    def reset(self, state: StabilizationState):
        """A new gesture began: back to ARMED."""
        if state.should_stabilize:
            logger.debug("Stabilization cancelled by new gesture")
        state.should_stabilize = False
        state.is_stabilizing = False
