# touchcam/camera/camera.py

from typing import Optional
import numpy as np
from touchcam.scene.transform import Transform


class Camera:
    """
    The single scene camera.
    The pose lives in `transform`; controllers mutate it in place.
    """

    def __init__(self, transform: Optional[Transform] = None, screen_width: int = 1280, screen_height: int = 720):
        self.transform = transform if transform is not None else Transform()

        # Projection
        self.field_of_view = 60.0
        self.near_clip = 0.1
        self.far_clip = 1000.0

        # Viewport
        self.screen_width = screen_width
        self.screen_height = screen_height

    @property
    def aspect_ratio(self) -> float:
        if self.screen_height <= 0:
            return 1.0
        return self.screen_width / self.screen_height

    def get_view_matrix(self) -> np.ndarray:
        """Get view matrix (inverse of camera transform)."""
        return np.linalg.inv(self.transform.get_world_matrix())

    def get_projection_matrix(self) -> np.ndarray:
        f = 1.0 / np.tan(np.radians(self.field_of_view) / 2.0)

        proj = np.zeros((4, 4), dtype=np.float32)
        proj[0, 0] = f / self.aspect_ratio
        proj[1, 1] = f
        proj[2, 2] = (self.far_clip + self.near_clip) / (self.near_clip - self.far_clip)
        proj[2, 3] = (2.0 * self.far_clip * self.near_clip) / (self.near_clip - self.far_clip)
        proj[3, 2] = -1.0

        return proj
