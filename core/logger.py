"""Logging helpers for SmartDiet.

Every module obtains its logger through `get_logger`, which attaches one
shared stream handler and one rotating file handler. The log directory is
``logs/`` at the project root unless ``SMART_DIET_LOG_DIR`` points
elsewhere; `set_log_level` applies the configured level to every logger
handed out so far.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Set, Union

LOG_DIR = os.getenv(
    "SMART_DIET_LOG_DIR",
    os.path.join(os.path.dirname(__file__), "..", "logs"),
)
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR, exist_ok=True)

LOG_FILE = os.path.join(LOG_DIR, "smart_diet.log")

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
_file_handler.setFormatter(_formatter)

_configured: Set[str] = set()


def get_logger(name: str = __name__, level: int = logging.INFO) -> logging.Logger:
    """Return a logger wired to the shared stream and rotating file handlers.

    Calling it repeatedly with the same name never stacks handlers.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level)
        logger.addHandler(_stream_handler)
        logger.addHandler(_file_handler)
    _configured.add(name)
    return logger


def set_log_level(level: Union[int, str]) -> None:
    """Apply ``level`` (name or number) to every SmartDiet logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    for name in _configured:
        logging.getLogger(name).setLevel(level)
