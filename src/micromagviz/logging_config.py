"""
Logging Configuration
=====================
One place to attach handlers to the `micromagviz` logger hierarchy.

Library modules only call `logging.getLogger(__name__)`; nothing is printed
until an entry point (the CLI or a GUI shell) calls `setup_logging`.
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "micromagviz"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route package log records to stdout and, optionally, to a file.

    Calling it again replaces the previous handlers.

    Args:
        level: Threshold applied to the logger and to every handler.
        log_file: Path of a log file, overwritten on each call.

    Returns:
        The package logger.
    """
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

    logger.debug(f"Logging initialized (level={logging.getLevelName(level)}, file={log_file}).")
    return logger
