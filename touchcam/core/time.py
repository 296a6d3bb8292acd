# touchcam/core/time.py

import time
from typing import Callable, List


class TimeManager:
    """
    Frame clock.
    Supplies the per-frame delta and the monotonic elapsed time the
    controller consumes.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter, max_delta: float = 0.25):
        self._clock = clock
        self.max_delta = max_delta  # Clamp for stalls (window drag, breakpoints)
        self.time_scale = 1.0
        self.delta_time = 0.0

        self._start_time = clock()
        self._last_frame_time = self._start_time
        self._elapsed = 0.0

        self.frame_count = 0

        self._fps_samples: List[float] = []
        self._fps_sample_count = 60
        self.fps = 0.0

    def tick(self) -> float:
        """
        Call once per frame.
        Returns frame delta time.
        """
        current_time = self._clock()
        raw_delta = max(0.0, current_time - self._last_frame_time)
        self._last_frame_time = current_time

        self.delta_time = min(raw_delta, self.max_delta) * self.time_scale
        self._elapsed += self.delta_time

        self._fps_samples.append(raw_delta)
        if len(self._fps_samples) > self._fps_sample_count:
            self._fps_samples.pop(0)

        avg_delta = sum(self._fps_samples) / len(self._fps_samples)
        self.fps = 1.0 / avg_delta if avg_delta > 0 else 0.0

        self.frame_count += 1
        return self.delta_time

    @property
    def elapsed(self) -> float:
        """Scaled time since construction, advanced only by tick()."""
        return self._elapsed

    def reset(self):
        self._start_time = self._clock()
        self._last_frame_time = self._start_time
        self._elapsed = 0.0
        self.delta_time = 0.0
        self.frame_count = 0
        self._fps_samples.clear()
        self.fps = 0.0
