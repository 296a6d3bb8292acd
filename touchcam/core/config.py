# touchcam/core/config.py

import copy
import json
from pathlib import Path
from typing import Any, Dict
from touchcam.core.logging import get_logger

logger = get_logger()


class Config:
    """
    Controller configuration file.
    Nested JSON sections merged over built-in defaults.
    """

    def __init__(self, config_path: str = "touchcam.json", create_missing: bool = True):
        self.config_path = Path(config_path)
        self.create_missing = create_missing
        self.data: Dict[str, Any] = {}

        # Tuned defaults; CameraSettings mirrors these
        self.defaults = {
            'camera': {
                'forward_speed': 15.0,
                'backward_speed': 15.0,
                'swipe_speed_horizontal': 1.0,
                'swipe_speed_vertical': 1.0,
                'rotation_speed_horizontal': 1.0,
                'rotation_speed_vertical': 1.0,
                'continuous_rotation_speed_horizontal': 20.0,
                'continuous_rotation_speed_vertical': 20.0,
                'acceleration': 1.0,
                'deceleration': 1.0,
                'tilt_speed': 1.0,
                'direction_change_factor': 0.1,
                'direction_change_speed': 5.0,
                'continuous_direction_change_angle': 5.0,
                'zoom_speed': 1.0,
                'camera_speed': 10.0,
                'invert': [],
            },
            'hover': {
                'smoothness': 1.0,
                'amplitude': 1.0,
                'frequency': 1.0,
            },
            'stabilization': {
                'speed': 1.0,
                'delay': 0.5,
            },
            'limits': {
                'min_y': 10.0,
                'max_y': 80.0,
                'min_x_angle': 10.0,
                'max_x_angle': 80.0,
                'planar_limit': 100.0,
            },
            'input': {
                'touch_sensitivity': 10.0,
                'screen_edge_border': 5.0,
                'horizontal_edge_threshold': 30.0,
                'vertical_edge_threshold': 45.0,
            },
            'window': {
                'width': 1280,
                'height': 720,
                'title': 'TouchCam',
            },
            'recording': {
                'path': 'touchcam_recording.bin',
            },
            'logging': {
                'dir': 'logs',
            },
        }

        self.load()

    def load(self):
        """Load configuration from file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    loaded_data = json.load(f)

                self.data = self._deep_merge(copy.deepcopy(self.defaults), loaded_data)
                logger.info(f"Loaded configuration from {self.config_path}")
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load configuration from {self.config_path}: {e}")
                self.data = copy.deepcopy(self.defaults)
        else:
            self.data = copy.deepcopy(self.defaults)
            if self.create_missing:
                logger.info(f"Configuration file not found, using defaults and creating {self.config_path}")
                self.save()
            else:
                logger.info("Configuration file not found, using defaults")

    def save(self):
        """Save configuration to file."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
            logger.info(f"Saved configuration to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save configuration to {self.config_path}: {e}")

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get configuration value by path.
        Example: config.get('limits.min_y')
        """
        value = self.data
        for key in path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, path: str, value: Any):
        """
        Set configuration value by path.
        Example: config.set('hover.amplitude', 2.0)
        """
        keys = path.split('.')
        data = self.data

        for key in keys[:-1]:
            if key not in data or not isinstance(data[key], dict):
                data[key] = {}
            data = data[key]

        data[keys[-1]] = value

    def section(self, name: str) -> Dict[str, Any]:
        """Copy of a top-level section (empty if absent)."""
        value = self.data.get(name, {})
        return dict(value) if isinstance(value, dict) else {}

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Recursively merge override dict into base dict."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
