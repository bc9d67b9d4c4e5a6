"""
Logging setup for the 'phaseflow' logger tree.

Modules log through ``logging.getLogger(__name__)``; this module only attaches
handlers to the package logger. The level can be given explicitly or through
the ``PHASEFLOW_LOG_LEVEL`` environment variable (``DEBUG`` shows every
integrated trajectory).
"""
import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "phaseflow"
LOG_LEVEL_ENV = "PHASEFLOW_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def resolve_level(level: Union[int, str, None] = None) -> int:
    """
    Turn a level name or number into a logging level.

    Falls back to the environment variable, then to INFO. Unknown names give INFO.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, logging.INFO)
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return int(level)


def setup_logging(level: Union[int, str, None] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler (and optionally a file handler) to the package logger.

    Calling it again replaces the handlers, so restarting the app in one
    interpreter does not duplicate output.

    Args:
        level: Level number or name. None reads ``PHASEFLOW_LOG_LEVEL``.
        log_file: Optional path; the file is overwritten.

    Returns:
        The configured package logger.
    """
    level = resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging at {logging.getLevelName(level)}")
    return logger
