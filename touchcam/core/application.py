# touchcam/core/application.py

from pathlib import Path

from touchcam.camera.camera import Camera
from touchcam.camera.settings import CameraSettings
from touchcam.camera.touch_camera import TouchCameraController
from touchcam.core.config import Config
from touchcam.core.logging import get_logger, init_logger
from touchcam.core.time import TimeManager
from touchcam.input.input_manager import InputManager
from touchcam.input.input_recorder import InputRecorder
from touchcam.input.input_state import InputSample
from touchcam.scene.transform import Transform

TILT_RATE = 30.0  # Degrees per second while a tilt key is held
GRID_EXTENT = 100
GRID_STEP = 10


class TouchCameraApp:
    """
    panda3d viewer that drives the scene camera with TouchCameraController.

    Keys: page_up/page_down tilt, r toggles recording, p replays the last
    recording, escape quits.
    """

    def __init__(self, config_path: str = "touchcam.json"):
        self.config = Config(config_path)

        # Loggers bound at import share the named logger, so re-init moves them too
        log_dir = Path(self.config.get('logging.dir', 'logs'))
        self.logger = get_logger()
        if log_dir != self.logger.log_dir:
            self.logger = init_logger(log_dir=str(log_dir))
        self.logger.info("Initializing TouchCam")

        self.settings = CameraSettings.from_config(self.config)
        self.time = TimeManager()
        self.input = InputManager()
        self.recorder = InputRecorder()

        self.base = None
        self.camera = None
        self.controller = None
        self.recording_path = self.config.get('recording.path', 'touchcam_recording.bin')

    def initialize(self):
        """Open the window and build the scene."""
        try:
            from panda3d.core import load_prc_file_data
            from direct.showbase.ShowBase import ShowBase

            load_prc_file_data("", f"""
                win-size {self.config.get('window.width', 1280)} {self.config.get('window.height', 720)}
                window-title {self.config.get('window.title', 'TouchCam')}
            """)
            self.base = ShowBase()
            self.base.disableMouse()

            self.input.initialize(self.base)
            width, height = self.input.get_screen_size()

            start = Transform(position=(0.0, 40.0, -60.0))
            start.set_euler_angles(30.0, 0.0, 0.0)
            self.camera = Camera(start, screen_width=width, screen_height=height)
            self.controller = TouchCameraController(self.camera, self.settings)

            self._build_scene()
            self._bind_keys()
            self.base.taskMgr.add(self._frame_task, "touchcam-frame")
        except Exception as e:
            self.logger.critical(f"Initialization failed: {e}", exc_info=True)
            raise

    def run(self):
        self.initialize()
        self.logger.info("Starting application loop")
        self.time.reset()
        self.base.run()

    def _build_scene(self):
        """Ground grid on the X/Z plane plus a few landmarks."""
        from panda3d.core import LineSegs

        lines = LineSegs("ground")
        lines.setColor(0.35, 0.4, 0.45, 1.0)
        for offset in range(-GRID_EXTENT, GRID_EXTENT + 1, GRID_STEP):
            # panda3d is Z-up: our ground X/Z maps to its X/Y
            lines.moveTo(offset, -GRID_EXTENT, 0)
            lines.drawTo(offset, GRID_EXTENT, 0)
            lines.moveTo(-GRID_EXTENT, offset, 0)
            lines.drawTo(GRID_EXTENT, offset, 0)
        self.base.render.attachNewNode(lines.create())

        for x, y in ((0, 0), (40, 30), (-50, 60), (70, -40)):
            box = self.base.loader.loadModel("models/box")
            box.reparentTo(self.base.render)
            box.setScale(6.0)
            box.setPos(x, y, 0)

    def _bind_keys(self):
        self.base.accept("escape", self.quit)
        self.base.accept("r", self.toggle_recording)
        self.base.accept("p", self.start_playback)

    def _frame_task(self, task):
        dt = self.time.tick()

        try:
            sample = self.input.poll()
        except Exception as e:
            self.logger.error(f"Input poll failed: {e}", exc_info=True)
            sample = InputSample.idle()

        sample, dt, elapsed = self.next_input(sample, dt, self.time.elapsed)

        try:
            self.controller.update(sample, dt, elapsed)
            self._apply_tilt_keys(dt)
        except Exception as e:
            self.logger.error(f"Camera update failed: {e}", exc_info=True)

        self._apply_pose()
        return task.cont

    def next_input(self, sample: InputSample, dt: float, elapsed: float):
        """
        Live input, recorded as it passes, or the next replayed frame.
        Replay substitutes the recorded dt and elapsed so hover and
        stabilization timing match the recorded session.
        """
        if not self.recorder.playing_back:
            self.recorder.record_frame(sample, dt, elapsed)
            return sample, dt, elapsed

        frame = self.recorder.next_frame()
        if frame is None:
            # Recorded timestamps are done with; restart timing from live time
            self.controller.reset()
            return sample, dt, elapsed
        return frame.sample, frame.dt, frame.elapsed

    def _apply_tilt_keys(self, dt: float):
        from panda3d.core import KeyboardButton

        watcher = self.base.mouseWatcherNode
        if not watcher:
            return
        if watcher.isButtonDown(KeyboardButton.page_up()):
            self.controller.tilt(TILT_RATE, dt)
        elif watcher.isButtonDown(KeyboardButton.page_down()):
            self.controller.tilt(-TILT_RATE, dt)

    def _apply_pose(self):
        """Copy the Y-up pose onto panda3d's Z-up camera."""
        transform = self.camera.transform
        x, y, z = transform.get_world_position()
        pitch, yaw, roll = transform.euler_angles
        # Yaw is clockwise seen from above and positive pitch looks down
        self.base.camera.setPosHpr(float(x), float(z), float(y), -float(yaw), -float(pitch), float(roll))

    def toggle_recording(self):
        if self.recorder.recording:
            self.recorder.stop_recording()
            self.recorder.save_to_file(self.recording_path)
        else:
            self.recorder.start_recording()

    def start_playback(self):
        if self.recorder.recording:
            self.toggle_recording()
        if not self.recorder.recorded_frames:
            self.recorder.load_from_file(self.recording_path)
        self.controller.reset()
        self.recorder.start_playback()

    def quit(self):
        self.logger.info("Application quit requested")
        if self.recorder.recording:
            self.toggle_recording()
        self.config.save()
        self.base.userExit()
