# wiring_paths/utils/logger_setup.py

import logging
import sys
from typing import Optional

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class CleanFormatter(logging.Formatter):
    """
    Console formatter for counting runs.
    INFO: plain text, so results read like program output.
    WARN/ERROR: prefixed, and coloured when the console is a terminal.
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[38;20m",
        logging.WARNING: "\x1b[33;20m",
        logging.ERROR: "\x1b[31;20m",
        logging.CRITICAL: "\x1b[31;1m",
    }
    RESET = "\x1b[0m"

    FORMAT_DEBUG = "[DEBUG] %(name)s: %(message)s"
    FORMAT_INFO = "%(message)s"
    FORMAT_PREFIXED = "[%(levelname)s] %(message)s"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def _format_for(self, levelno: int) -> str:
        if levelno == logging.INFO:
            return self.FORMAT_INFO
        fmt = self.FORMAT_DEBUG if levelno == logging.DEBUG else self.FORMAT_PREFIXED
        color = self.LEVEL_COLORS.get(levelno)
        if self.use_color and color:
            return color + fmt + self.RESET
        return fmt

    def format(self, record):
        return logging.Formatter(self._format_for(record.levelno)).format(record)


def setup_logger(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the root logger to write to stdout, and optionally to a file.

    Args:
        verbose (bool): If True, sets level to DEBUG. Otherwise, INFO.
        log_file (str, optional): Also append uncoloured, timestamped records here.

    Returns:
        logging.Logger: The configured root logger.
    """
    root_logger = logging.getLogger()

    if root_logger.handlers:
        root_logger.handlers = []

    level = logging.DEBUG if verbose else logging.INFO
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(CleanFormatter(use_color=sys.stdout.isatty()))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)
    return root_logger
