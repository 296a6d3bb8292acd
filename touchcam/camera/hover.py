# touchcam/camera/hover.py

from dataclasses import dataclass
import numpy as np
from touchcam.camera.settings import CameraSettings
from touchcam.scene.transform import Transform
from touchcam.utils.math import clamp01, lerp


@dataclass
class HoverState:
    baseline_height: float


class HoverOscillator:
    """
    Idle bob around the startup height.
    Phase comes from absolute elapsed time, so dropped frames do not drift.
    """

    def __init__(self, settings: CameraSettings):
        self.settings = settings

    def target_height(self, state: HoverState, elapsed: float) -> float:
        offset = self.settings.hover_amplitude * np.sin(elapsed * self.settings.hover_frequency)
        return self.settings.clamp_height(state.baseline_height + float(offset))

    def step(self, transform: Transform, state: HoverState, elapsed: float, dt: float) -> float:
        """Move height toward the oscillating target. Returns the new height."""
        target = self.target_height(state, elapsed)
        t = clamp01(dt * self.settings.hover_smoothness)
        height = self.settings.clamp_height(lerp(transform.height, target, t))
        transform.height = height
        return height
