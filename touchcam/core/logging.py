# touchcam/core/logging.py

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional


class Logger:
    """
    Controller logging.
    Console output for the user, a timestamped debug file for frame traces.
    """

    def __init__(self, name: str = "TouchCam", log_dir: str = "logs", console_level: int = logging.INFO):
        self.name = name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.console_level = console_level

        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        # Re-initialising the same name must not stack handlers
        if self.logger.handlers:
            for handler in list(self.logger.handlers):
                self.logger.removeHandler(handler)
                handler.close()
        self._setup_handlers()

    def _setup_handlers(self):
        """Console (INFO and above) and per-run file (DEBUG and above)."""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.console_level)
        console_handler.setFormatter(logging.Formatter('%(levelname)-8s [%(name)s] %(message)s'))
        self.logger.addHandler(console_handler)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_file = self.log_dir / f"touchcam_{timestamp}.log"

        file_handler = logging.FileHandler(self.log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s'
        ))
        self.logger.addHandler(file_handler)

    def debug(self, message: str):
        self.logger.debug(message, stacklevel=2)

    def info(self, message: str):
        self.logger.info(message, stacklevel=2)

    def warning(self, message: str):
        self.logger.warning(message, stacklevel=2)

    def error(self, message: str, exc_info: bool = False):
        self.logger.error(message, exc_info=exc_info, stacklevel=2)

    def critical(self, message: str, exc_info: bool = False):
        self.logger.critical(message, exc_info=exc_info, stacklevel=2)


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get the global controller logger, creating it on first use."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def init_logger(name: str = "TouchCam", log_dir: str = "logs", console_level: int = logging.INFO) -> Logger:
    """Initialize global logger. Call before importing controller modules."""
    global _logger
    _logger = Logger(name, log_dir, console_level)
    return _logger
