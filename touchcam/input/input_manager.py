# touchcam/input/input_manager.py

from typing import Dict, Optional, Tuple
from touchcam.core.logging import get_logger
from touchcam.input.input_state import InputSample, Vec2
from touchcam.input.touch_tracker import TouchTracker


class InputManager:
    """
    Polls the panda3d window once per frame into an InputSample.

    Pointer 0 is the system mouse; any further pointers the window reports
    are treated as touch contacts. Screen positions are flipped so the origin
    is bottom-left and dragging up gives a positive Y delta.
    """

    def __init__(self):
        self.base = None  # direct.showbase.ShowBase.ShowBase
        self.logger = get_logger()
        self.tracker = TouchTracker()
        self.sample = InputSample.idle()
        self.logger.info("InputManager initialized")

    def initialize(self, base):
        """Attach to a running ShowBase."""
        self.base = base
        width, height = self.get_screen_size()
        self.logger.info(f"InputManager attached to window {width}x{height}")

    def get_screen_size(self) -> Tuple[int, int]:
        if not self.base or not self.base.win:
            return (0, 0)
        return (self.base.win.getXSize(), self.base.win.getYSize())

    def poll(self) -> InputSample:
        """Read the window's pointers and mouse button 1."""
        if not self.base or not self.base.win:
            self.sample = InputSample.idle()
            return self.sample

        from panda3d.core import MouseButton

        win = self.base.win
        height = win.getYSize()

        mouse_position = None
        pointer = win.getPointer(0)
        if pointer.getInWindow():
            mouse_position = (float(pointer.getX()), float(height - pointer.getY()))

        watcher = self.base.mouseWatcherNode
        mouse_pressed = bool(watcher and watcher.hasMouse() and watcher.isButtonDown(MouseButton.one()))

        touch_pointers: Dict[int, Vec2] = {}
        for index in range(1, win.getNumPointers()):
            data = win.getPointer(index)
            if data.getInWindow():
                touch_pointers[index] = (float(data.getX()), float(height - data.getY()))

        self.sample = self.build_sample(mouse_position, mouse_pressed, touch_pointers)
        return self.sample

    def build_sample(self, mouse_position: Optional[Vec2], mouse_pressed: bool,
                     touch_pointers: Dict[int, Vec2]) -> InputSample:
        """Combine raw readings into one frame's snapshot."""
        touches = self.tracker.update(touch_pointers)
        if mouse_position is None:
            # Outside the window the last known position is kept but the press is ignored
            return InputSample(touches=touches, mouse_position=self.sample.mouse_position, mouse_pressed=False)
        return InputSample(touches=touches, mouse_position=mouse_position, mouse_pressed=mouse_pressed)
