# touchcam/camera/camera_controller.py

from abc import ABC, abstractmethod
from touchcam.camera.camera import Camera
from touchcam.input.input_state import InputSample


class CameraController(ABC):
    """
    Base class for camera control strategies.
    Driven once per rendered frame with that frame's input snapshot.
    """

    def __init__(self, camera: Camera):
        self.camera = camera
        self.enabled = True

    @property
    def transform(self):
        return self.camera.transform

    @abstractmethod
    def update(self, sample: InputSample, dt: float, elapsed: float):
        """Advance one frame. `elapsed` is monotonic seconds since start."""
        pass
