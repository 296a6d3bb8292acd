# touchcam/camera/settings.py

import dataclasses
from dataclasses import dataclass
from enum import IntFlag
from typing import Iterable, Union
from touchcam.core.config import Config
from touchcam.core.logging import get_logger

logger = get_logger()


class InvertSettings(IntFlag):
    """Per-motion sign inversion."""

    NONE = 0
    SWIPE_HORIZONTAL = 1 << 0
    SWIPE_VERTICAL = 1 << 1
    CONTINUOUS_ROTATION_HORIZONTAL = 1 << 2
    CONTINUOUS_ROTATION_VERTICAL = 1 << 3
    TILT = 1 << 4
    MOVE = 1 << 5
    DIRECTION_CHANGE = 1 << 6

    @classmethod
    def parse(cls, value: Union[int, str, Iterable[str], 'InvertSettings']) -> 'InvertSettings':
        """Accepts a flag, an int mask, a flag name, or a list of names."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            value = [value]

        flags = cls.NONE
        for name in value:
            try:
                flags |= cls[name.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown invert setting: {name!r}") from None
        return flags

    def sign(self, flag: 'InvertSettings') -> float:
        """-1.0 when `flag` is set, else 1.0."""
        return -1.0 if self & flag else 1.0


@dataclass(frozen=True)
class CameraSettings:
    """
    Tuning constants for the touch camera.
    Speeds are per second, distances in world units, angles in degrees,
    screen measurements in pixels.
    """

    # Forward/backward
    forward_speed: float = 15.0
    backward_speed: float = 15.0

    # Movement
    swipe_speed_horizontal: float = 1.0
    swipe_speed_vertical: float = 1.0
    rotation_speed_horizontal: float = 1.0
    rotation_speed_vertical: float = 1.0
    continuous_rotation_speed_horizontal: float = 20.0
    continuous_rotation_speed_vertical: float = 20.0
    acceleration: float = 1.0
    deceleration: float = 1.0

    # Screen edges
    horizontal_edge_threshold: float = 30.0
    vertical_edge_threshold: float = 45.0
    screen_edge_border: float = 5.0

    # Stabilization
    stabilization_speed: float = 1.0
    stabilization_delay: float = 0.5

    # Hover
    hover_smoothness: float = 1.0
    hover_amplitude: float = 1.0
    hover_frequency: float = 1.0

    # Tilt
    tilt_speed: float = 1.0

    # Direction change (momentum)
    direction_change_factor: float = 0.1
    direction_change_speed: float = 5.0
    continuous_direction_change_angle: float = 5.0

    # Touch / zoom
    touch_sensitivity: float = 10.0
    zoom_speed: float = 1.0

    # Limits
    min_y: float = 10.0
    max_y: float = 80.0
    min_x_angle: float = 10.0
    max_x_angle: float = 80.0
    planar_limit: float = 100.0
    camera_speed: float = 10.0

    invert_settings: InvertSettings = InvertSettings.NONE

    def __post_init__(self):
        if self.min_y > self.max_y:
            raise ValueError(f"min_y ({self.min_y}) must not exceed max_y ({self.max_y})")
        if self.min_x_angle > self.max_x_angle:
            raise ValueError(f"min_x_angle ({self.min_x_angle}) must not exceed max_x_angle ({self.max_x_angle})")
        if self.stabilization_delay < 0:
            raise ValueError(f"stabilization_delay must be >= 0, got {self.stabilization_delay}")
        if self.planar_limit < 0:
            raise ValueError(f"planar_limit must be >= 0, got {self.planar_limit}")
        if not isinstance(self.invert_settings, InvertSettings):
            object.__setattr__(self, 'invert_settings', InvertSettings.parse(self.invert_settings))

    def replace(self, **changes) -> 'CameraSettings':
        """Copy with some fields changed."""
        return dataclasses.replace(self, **changes)

    def clamp_height(self, y: float) -> float:
        return max(self.min_y, min(self.max_y, y))

    @classmethod
    def from_config(cls, config: Config) -> 'CameraSettings':
        """Build settings from the sectioned JSON config."""
        known = {f.name for f in dataclasses.fields(cls)}
        values = {}

        # Sections whose keys are field names as-is
        for section in ('camera', 'limits', 'input'):
            for key, value in config.section(section).items():
                if key == 'invert':
                    values['invert_settings'] = InvertSettings.parse(value)
                elif key in known:
                    values[key] = value
                else:
                    logger.warning(f"Ignoring unknown config key '{section}.{key}'")

        # Sections that prefix their keys
        for section, prefix in (('hover', 'hover_'), ('stabilization', 'stabilization_')):
            for key, value in config.section(section).items():
                name = prefix + key
                if name in known:
                    values[name] = value
                else:
                    logger.warning(f"Ignoring unknown config key '{section}.{key}'")

        settings = cls(**values)
        logger.debug(f"Camera settings loaded: {settings}")
        return settings
