# touchcam/camera/gestures.py

from dataclasses import dataclass, field
from enum import Enum
import numpy as np
from touchcam.input.input_state import InputSample


class Gesture(Enum):
    NONE = 0
    SINGLE_CONTACT = 1
    MULTI_CONTACT = 2


@dataclass
class GestureState:
    """Gesture history carried between frames."""

    previous_gesture: Gesture = Gesture.NONE
    anchor_position: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))
    is_interacting: bool = False

    def set_anchor(self, position):
        self.anchor_position = np.asarray(position, dtype=np.float64).reshape(2).copy()

    def take_delta(self, position) -> np.ndarray:
        """Delta from the anchor, then re-anchor at `position`."""
        current = np.asarray(position, dtype=np.float64).reshape(2)
        delta = current - self.anchor_position
        self.anchor_position = current.copy()
        return delta


@dataclass(frozen=True)
class GestureFrame:
    """Classification of one frame against the previous one."""

    gesture: Gesture
    previous: Gesture
    is_idle: bool

    @property
    def is_transition(self) -> bool:
        return self.gesture != self.previous

    @property
    def is_continuation(self) -> bool:
        return self.gesture != Gesture.NONE and not self.is_transition


def classify_gesture(sample: InputSample) -> Gesture:
    """
    Contact count to gesture.
    More than two contacts is not a gesture and falls through to NONE.
    """
    count = sample.contact_count
    if count == 1:
        return Gesture.SINGLE_CONTACT
    if count == 2:
        return Gesture.MULTI_CONTACT
    return Gesture.NONE


def classify_frame(sample: InputSample, state: GestureState) -> GestureFrame:
    return GestureFrame(
        gesture=classify_gesture(sample),
        previous=state.previous_gesture,
        is_idle=sample.is_idle,
    )
