# touchcam/input/input_recorder.py

import json
import struct
from typing import List, Optional
from touchcam.core.logging import get_logger
from touchcam.input.input_state import InputSample

logger = get_logger()

_MAGIC = b'TCIR'
_VERSION = 2
_FRAME_HEADER = struct.Struct('<IddI')


class InputFrame:
    """Single recorded frame: the sample plus the frame delta and elapsed time it was used with."""

    def __init__(self, frame_number: int, dt: float, sample: InputSample, elapsed: float = 0.0):
        self.frame_number = frame_number
        self.dt = dt
        self.sample = sample
        self.elapsed = elapsed


class InputRecorder:
    """
    Records and replays InputSample sequences.
    Playback is frame-indexed so a replay drives the controller with exactly
    the recorded samples and frame times.
    """

    def __init__(self):
        self.recording = False
        self.playing_back = False

        self.recorded_frames: List[InputFrame] = []
        self.playback_index = 0

    def start_recording(self):
        self.recording = True
        self.recorded_frames.clear()
        logger.info("Started input recording")

    def stop_recording(self):
        self.recording = False
        logger.info(f"Stopped input recording. Recorded {len(self.recorded_frames)} frames.")

    def record_frame(self, sample: InputSample, dt: float, elapsed: float = 0.0):
        if not self.recording:
            return
        self.recorded_frames.append(InputFrame(len(self.recorded_frames), dt, sample, elapsed))

    def start_playback(self):
        if not self.recorded_frames:
            logger.warning("Cannot start playback: No frames recorded")
            return

        self.playing_back = True
        self.playback_index = 0
        logger.info("Started input playback")

    def stop_playback(self):
        self.playing_back = False
        self.playback_index = 0
        logger.info("Stopped input playback")

    def next_frame(self) -> Optional[InputFrame]:
        """Next recorded frame, or None (and playback stops) at the end."""
        if not self.playing_back:
            return None
        if self.playback_index >= len(self.recorded_frames):
            self.stop_playback()
            return None

        frame = self.recorded_frames[self.playback_index]
        self.playback_index += 1
        return frame

    def save_to_file(self, filepath: str) -> bool:
        """
        Binary layout: magic, version, frame count, then per frame
        (frame number, dt, elapsed, payload length, JSON payload).
        """
        try:
            with open(filepath, 'wb') as f:
                f.write(_MAGIC)
                f.write(struct.pack('<II', _VERSION, len(self.recorded_frames)))

                for frame in self.recorded_frames:
                    payload = json.dumps(frame.sample.to_dict()).encode('utf-8')
                    f.write(_FRAME_HEADER.pack(frame.frame_number, frame.dt, frame.elapsed, len(payload)))
                    f.write(payload)
            logger.info(f"Saved input recording to {filepath}")
            return True
        except OSError as e:
            logger.error(f"Failed to save input recording to {filepath}: {e}")
            return False

    def load_from_file(self, filepath: str) -> bool:
        try:
            with open(filepath, 'rb') as f:
                if f.read(4) != _MAGIC:
                    raise ValueError("not an input recording")
                version, num_frames = struct.unpack('<II', f.read(8))
                if version != _VERSION:
                    raise ValueError(f"unsupported recording version {version}")

                frames = []
                for _ in range(num_frames):
                    frame_number, dt, elapsed, length = _FRAME_HEADER.unpack(f.read(_FRAME_HEADER.size))
                    payload = json.loads(f.read(length).decode('utf-8'))
                    frames.append(InputFrame(frame_number, dt, InputSample.from_dict(payload), elapsed))
        except (OSError, ValueError, KeyError, TypeError, AttributeError, struct.error) as e:
            logger.error(f"Failed to load input recording from {filepath}: {e}")
            return False

        self.recorded_frames = frames
        logger.info(f"Loaded input recording from {filepath} ({len(self.recorded_frames)} frames)")
        return True
