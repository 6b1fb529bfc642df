"""
Logging setup for pressureram.
"""
from __future__ import annotations
import logging
import sys
from typing import Dict

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_loggers: Dict[str, logging.Logger] = {}


def _get_log_level(level_name: str, default_level: int = logging.INFO) -> int:
    level = logging.getLevelName(str(level_name).upper())
    if isinstance(level, int):
        return level
    logging.warning(f"Invalid log level name '{level_name}'. Using {logging.getLevelName(default_level)}.")
    return default_level


def setup_logger(name: str = "pressureram", level_name: str = "INFO",
                 log_format: str = DEFAULT_LOG_FORMAT) -> logging.Logger:
    """
    Configure the package logger with a single console handler.
    Calling it again with the same name returns the existing logger.
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    logger.setLevel(_get_log_level(level_name))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(handler)

    _loggers[name] = logger
    return logger
