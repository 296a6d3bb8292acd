# touchcam/input/touch_tracker.py

from typing import Dict, Tuple
from touchcam.input.input_state import Touch, TouchPhase, Vec2


class TouchTracker:
    """
    Turns raw pointer positions into per-frame touches.

    A pointer seen for the first time is BEGAN with zero delta, then MOVED or
    STATIONARY. A pointer that disappears is reported once as ENDED at its
    last position and then dropped.
    """

    def __init__(self):
        self._previous: Dict[int, Vec2] = {}

    def update(self, pointers: Dict[int, Vec2]) -> Tuple[Touch, ...]:
        touches = []

        for pointer_id in sorted(pointers):
            x, y = float(pointers[pointer_id][0]), float(pointers[pointer_id][1])
            previous = self._previous.get(pointer_id)

            if previous is None:
                touches.append(Touch(pointer_id, (x, y), (0.0, 0.0), TouchPhase.BEGAN))
                continue

            delta = (x - previous[0], y - previous[1])
            phase = TouchPhase.MOVED if delta != (0.0, 0.0) else TouchPhase.STATIONARY
            touches.append(Touch(pointer_id, (x, y), delta, phase))

        for pointer_id in sorted(set(self._previous) - set(pointers)):
            touches.append(Touch(pointer_id, self._previous[pointer_id], (0.0, 0.0), TouchPhase.ENDED))

        self._previous = {pid: (float(p[0]), float(p[1])) for pid, p in pointers.items()}
        return tuple(touches)

    @property
    def active_count(self) -> int:
        return len(self._previous)

    def clear(self):
        self._previous.clear()
