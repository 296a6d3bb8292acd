# touchcam/camera/touch_camera.py

from dataclasses import dataclass, field
from touchcam.camera.camera import Camera
from touchcam.camera.camera_controller import CameraController
from touchcam.camera.gestures import Gesture, GestureFrame, GestureState, classify_frame
from touchcam.camera.hover import HoverOscillator, HoverState
from touchcam.camera.momentum import MomentumOscillator, MomentumState
from touchcam.camera.motion import MultiContactMapper, SingleContactAction, SingleContactMapper, tilt
from touchcam.camera.settings import CameraSettings
from touchcam.camera.stabilizer import IdleStabilizer, StabilizationState, StabilizerPhase
from touchcam.core.logging import get_logger
from touchcam.input.input_state import InputSample, TouchPhase

logger = get_logger()


@dataclass
class ControllerState:
    """Everything the controller remembers between frames."""

    hover: HoverState
    gesture: GestureState = field(default_factory=GestureState)
    stabilization: StabilizationState = field(default_factory=StabilizationState)
    momentum: MomentumState = field(default_factory=MomentumState)
    has_just_started: bool = True  # No real gesture seen yet


class TouchCameraController(CameraController):
    """
    Touch/mouse camera for an overview scene.

    Per frame: classify the gesture, run exactly one of the single-contact
    mapper, the pinch mapper or the idle stabilizer, then continue any
    momentum spin, then blend the hover bob. Each step reads the pose the
    previous step wrote.
    """

    def __init__(self, camera: Camera, settings: CameraSettings = None):
        super().__init__(camera)
        self.settings = settings if settings is not None else CameraSettings()

        # Screen size is sampled once
        self.screen_width = float(camera.screen_width)
        self.screen_height = float(camera.screen_height)

        self.single_contact = SingleContactMapper(self.settings)
        self.multi_contact = MultiContactMapper(self.settings)
        self.stabilizer = IdleStabilizer(self.settings)
        self.momentum = MomentumOscillator(self.settings)
        self.hover = HoverOscillator(self.settings)

        self.state = self._create_state()
        self._dt = 0.0

        logger.info(f"TouchCameraController initialized at {self.transform!r} "
                    f"(screen {int(self.screen_width)}x{int(self.screen_height)})")

    def _create_state(self) -> ControllerState:
        return ControllerState(hover=HoverState(baseline_height=self.transform.height))

    def reset(self):
        """Forget all gesture history and recapture the hover baseline."""
        self.state = self._create_state()
        logger.info(f"TouchCameraController reset, hover baseline {self.state.hover.baseline_height:.2f}")

    # Frame entry point

    def update(self, sample: InputSample, dt: float, elapsed: float) -> Gesture:
        """Advance one frame. Returns the gesture seen this frame."""
        if not self.enabled:
            return Gesture.NONE

        self._dt = dt
        state = self.state
        frame = classify_frame(sample, state.gesture)

        if frame.is_idle:
            self.momentum.disarm(state.momentum)
            state.gesture.is_interacting = False
            if not state.has_just_started:
                self.stabilizer.step(self.transform, state.stabilization, elapsed, dt)
        else:
            state.gesture.is_interacting = True
            if frame.is_transition:
                self._on_gesture_transition(frame)

            if frame.gesture is Gesture.SINGLE_CONTACT:
                self._handle_single_contact(sample, frame)
            elif frame.gesture is Gesture.MULTI_CONTACT:
                self._handle_multi_contact(sample, frame)
            elif not state.has_just_started:
                # More than two contacts: treated like letting go
                self.stabilizer.step(self.transform, state.stabilization, elapsed, dt)

            self.momentum.step(self.transform, state.momentum, dt)

        state.gesture.previous_gesture = frame.gesture

        self.hover.step(self.transform, state.hover, elapsed, dt)
        return frame.gesture

    def _on_gesture_transition(self, frame: GestureFrame):
        logger.debug(f"Gesture {frame.previous.name} -> {frame.gesture.name}")
        self.momentum.disarm(self.state.momentum)
        if frame.gesture is not Gesture.NONE:
            self.state.has_just_started = False
            self.stabilizer.reset(self.state.stabilization)

    def _handle_single_contact(self, sample: InputSample, frame: GestureFrame):
        gesture = self.state.gesture
        position = sample.primary_position

        if frame.is_transition:
            # Touch-down only anchors; moving now would jump
            gesture.set_anchor(position)
            return

        delta = gesture.take_delta(position)
        if sample.primary_phase is not TouchPhase.MOVED:
            return

        result = self.single_contact.apply(self.transform, delta, self._dt)
        if result.action is SingleContactAction.ROTATE:
            self.momentum.arm(self.state.momentum, result.rotation_y)

    def _handle_multi_contact(self, sample: InputSample, frame: GestureFrame):
        if frame.is_transition:
            return

        first, second = sample.touches[0], sample.touches[1]
        if TouchPhase.MOVED in (first.phase, second.phase):
            self.multi_contact.apply(self.transform, first, second, self._dt)

    # Supplementary operations

    def tilt(self, angle_delta: float, dt: float) -> float:
        """Pitch the camera, clamped to [min_x_angle, max_x_angle]. Returns the new pitch."""
        return tilt(self.transform, angle_delta, self.settings, dt)

    def is_near_horizontal_screen_edge(self, position) -> bool:
        border = self.settings.screen_edge_border
        return position[0] <= border or position[0] >= self.screen_width - border

    def is_near_vertical_screen_edge(self, position) -> bool:
        border = self.settings.screen_edge_border
        return position[1] <= border or position[1] >= self.screen_height - border

    def stabilizer_phase(self, now: float) -> StabilizerPhase:
        return self.stabilizer.phase(self.state.stabilization, now)

    @property
    def is_interacting(self) -> bool:
        return self.state.gesture.is_interacting

    @property
    def continuous_direction_change(self) -> bool:
        return self.state.momentum.continuous_direction_change
