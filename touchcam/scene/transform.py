# touchcam/scene/transform.py

import numpy as np
from touchcam.utils.math import (
    IDENTITY_QUATERNION,
    quaternion_from_axis_angle,
    quaternion_from_euler,
    quaternion_multiply,
    quaternion_normalize,
    quaternion_to_euler,
    quaternion_to_matrix3,
    wrap_180,
    wrap_360,
)


class Transform:
    """
    Camera pose: world position plus orientation quaternion.
    +Y is up; the ground plane is X/Z.
    """

    def __init__(self, position=None, rotation=None):
        self._position = np.zeros(3, dtype=np.float32)
        self._rotation = IDENTITY_QUATERNION.copy()  # Quaternion [x, y, z, w]
        self._dirty = True
        self._world_matrix = np.eye(4, dtype=np.float32)

        if position is not None:
            self.set_world_position(position)
        if rotation is not None:
            self.set_world_rotation(rotation)

    # Position

    def get_world_position(self) -> np.ndarray:
        """Copy of the world position."""
        return self._position.copy()

    def set_world_position(self, position):
        self._position = np.asarray(position, dtype=np.float32).reshape(3).copy()
        self._dirty = True

    def translate(self, offset):
        """Move in world space."""
        self.set_world_position(self._position + np.asarray(offset, dtype=np.float32))

    @property
    def height(self) -> float:
        return float(self._position[1])

    @height.setter
    def height(self, value: float):
        position = self._position.copy()
        position[1] = value
        self.set_world_position(position)

    # Rotation

    def get_world_rotation(self) -> np.ndarray:
        """Copy of the orientation quaternion."""
        return self._rotation.copy()

    def set_world_rotation(self, rotation):
        self._rotation = quaternion_normalize(np.asarray(rotation, dtype=np.float32).reshape(4))
        self._dirty = True

    def rotate(self, axis, degrees: float, world_space: bool = True):
        """
        Rotate about `axis`.
        World space pre-multiplies, local space post-multiplies.
        """
        delta = quaternion_from_axis_angle(axis, degrees)
        if world_space:
            self.set_world_rotation(quaternion_multiply(delta, self._rotation))
        else:
            self.set_world_rotation(quaternion_multiply(self._rotation, delta))

    @property
    def euler_angles(self) -> np.ndarray:
        """[pitch, yaw, roll] degrees; yaw in [0, 360), pitch and roll signed."""
        pitch, yaw, roll = quaternion_to_euler(self._rotation)
        return np.array([wrap_180(pitch), wrap_360(yaw), wrap_180(roll)], dtype=np.float64)

    def set_euler_angles(self, pitch: float, yaw: float, roll: float):
        self.set_world_rotation(quaternion_from_euler(pitch, yaw, roll))

    @property
    def yaw(self) -> float:
        return float(self.euler_angles[1])

    @property
    def pitch(self) -> float:
        return float(self.euler_angles[0])

    @property
    def roll(self) -> float:
        return float(self.euler_angles[2])

    # Derived

    @property
    def forward(self) -> np.ndarray:
        """Local +Z in world space."""
        return quaternion_to_matrix3(self._rotation)[:, 2]

    @property
    def right(self) -> np.ndarray:
        """Local +X in world space."""
        return quaternion_to_matrix3(self._rotation)[:, 0]

    @property
    def up(self) -> np.ndarray:
        """Local +Y in world space."""
        return quaternion_to_matrix3(self._rotation)[:, 1]

    def get_world_matrix(self) -> np.ndarray:
        """4x4 rigid transform (no scale)."""
        if self._dirty:
            matrix = np.eye(4, dtype=np.float32)
            matrix[:3, :3] = quaternion_to_matrix3(self._rotation)
            matrix[:3, 3] = self._position
            self._world_matrix = matrix
            self._dirty = False
        return self._world_matrix

    def copy(self) -> 'Transform':
        return Transform(self._position, self._rotation)

    def __repr__(self):
        pitch, yaw, roll = self.euler_angles
        x, y, z = self._position
        return f"Transform(pos=({x:.2f}, {y:.2f}, {z:.2f}), pitch={pitch:.2f}, yaw={yaw:.2f}, roll={roll:.2f})"
