"""Logging setup for the demo CLI and scripts.

Library modules only create ``logging.getLogger(__name__)`` loggers under
the ``calplt`` namespace; nothing is configured on import. Scripts call
``setup_logging`` once to get console (and optionally file) output.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "calplt"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown log level: {level!r}")
        return value
    return level


def setup_logging(
    level: Union[int, str] = logging.INFO, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Attach handlers to the ``calplt`` logger and return it.

    Args:
        level: Level as an int or a name such as ``"debug"``.
        log_file: Optional path; the file is overwritten on each run.

    Calling this again replaces the handlers from the previous call.
    """
    level = _level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %s", log_file or "stderr")
    return logger
