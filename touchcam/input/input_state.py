# touchcam/input/input_state.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

Vec2 = Tuple[float, float]


class TouchPhase(Enum):
    BEGAN = "began"
    MOVED = "moved"
    STATIONARY = "stationary"
    ENDED = "ended"
    CANCELED = "canceled"


@dataclass(frozen=True)
class Touch:
    """One contact point as reported for the current frame (screen pixels)."""

    finger_id: int
    position: Vec2
    delta_position: Vec2 = (0.0, 0.0)
    phase: TouchPhase = TouchPhase.MOVED

    @property
    def previous_position(self) -> Vec2:
        return (self.position[0] - self.delta_position[0], self.position[1] - self.delta_position[1])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'finger_id': self.finger_id,
            'position': list(self.position),
            'delta_position': list(self.delta_position),
            'phase': self.phase.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Touch':
        return cls(
            finger_id=int(data['finger_id']),
            position=tuple(data['position']),
            delta_position=tuple(data.get('delta_position', (0.0, 0.0))),
            phase=TouchPhase(data.get('phase', TouchPhase.MOVED.value)),
        )


@dataclass(frozen=True)
class InputSample:
    """
    One frame's input snapshot.
    Touches take precedence; a pressed mouse with no touches counts as a
    single contact.
    """

    touches: Tuple[Touch, ...] = field(default_factory=tuple)
    mouse_position: Vec2 = (0.0, 0.0)
    mouse_pressed: bool = False

    @property
    def touch_count(self) -> int:
        return len(self.touches)

    @property
    def uses_mouse(self) -> bool:
        return not self.touches and self.mouse_pressed

    @property
    def contact_count(self) -> int:
        if self.touches:
            return len(self.touches)
        return 1 if self.mouse_pressed else 0

    @property
    def is_idle(self) -> bool:
        return self.contact_count == 0

    @property
    def primary_position(self) -> Vec2:
        if self.touches:
            return self.touches[0].position
        return self.mouse_position

    @property
    def primary_phase(self) -> TouchPhase:
        # The mouse has no phases; a held button always drives motion
        if self.touches:
            return self.touches[0].phase
        return TouchPhase.MOVED

    @classmethod
    def idle(cls) -> 'InputSample':
        return cls()

    @classmethod
    def from_mouse(cls, position: Vec2, pressed: bool = True) -> 'InputSample':
        return cls(mouse_position=(float(position[0]), float(position[1])), mouse_pressed=pressed)

    @classmethod
    def from_touches(cls, *touches: Touch) -> 'InputSample':
        return cls(touches=tuple(touches))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'touches': [touch.to_dict() for touch in self.touches],
            'mouse_position': list(self.mouse_position),
            'mouse_pressed': self.mouse_pressed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InputSample':
        return cls(
            touches=tuple(Touch.from_dict(t) for t in data.get('touches', [])),
            mouse_position=tuple(data.get('mouse_position', (0.0, 0.0))),
            mouse_pressed=bool(data.get('mouse_pressed', False)),
        )
