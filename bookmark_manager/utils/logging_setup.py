"""
Logging configuration for the Bookmark Manager.

Standard output belongs to the output sink, so console logging goes to
standard error.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PACKAGE_LOGGER = "bookmark_manager"


def setup_logging(
    level: Union[str, int] = "WARNING", log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Set up logging configuration.

    Handlers are attached to the package logger and replaced on every call,
    so calling this more than once in a process is safe.

    Args:
        level: Console log level name or number
        log_file: Optional log file path; the file always logs at DEBUG

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger_level = level
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger_level = logging.DEBUG

    logger.setLevel(logger_level)

    logger.debug(f"Logging configured - console level: {logging.getLevelName(level)}")
    if log_file:
        logger.debug(f"Log file: {log_file}")
    return logger
