"""Console logging for label-norm.

Everything goes to stderr so stdout stays clean for ``label-norm labels``.
Lines look like ``[12:04:31] ✓ PROJ-12: -Bug +bug``; warnings and errors get
a colored tag.
"""

import logging
import sys
from datetime import datetime

GREEN = "\x1b[32m"
RED = "\x1b[31m"
YELLOW = "\x1b[33m"
DIM = "\x1b[2m"
BOLD = "\x1b[1m"
RESET = "\x1b[0m"

LOGGER_NAME = "label_norm"

_TAGS = {
    logging.WARNING: f"{YELLOW}warn{RESET} ",
    logging.ERROR: f"{RED}error{RESET} ",
    logging.CRITICAL: f"{RED}{BOLD}fatal{RESET} ",
}


class ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        message = record.getMessage()
        if record.levelno == logging.DEBUG:
            message = f"{DIM}{message}{RESET}"
        return f"{DIM}[{ts}]{RESET} {_TAGS.get(record.levelno, '')}{message}"


def get_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ConsoleFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def set_level(level: str) -> None:
    """Set the label-norm log level from a name like "debug" or "WARNING"."""
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    get_logger().setLevel(value)
