"""
Logger utility shared by the sampler modules.
"""
import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "POSESAMPLER_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _resolve_level(level: Optional[int | str]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, logging.INFO)
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return level


def get_logger(
    name: Optional[str] = None,
    level: Optional[int | str] = None,
    log_file: Optional[str] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Get a configured logger instance.
    Args:
        name: Logger name (None for root logger)
        level: Logging level; falls back to $POSESAMPLER_LOG_LEVEL, then INFO
        log_file: Optional file path for file logging
        fmt: Log message format
    Returns:
        logging.Logger: Configured logger
    """
    level = _resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    formatter = logging.Formatter(fmt)
    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(formatter)
        logger.addHandler(ch)
        if log_file is not None:
            fh = logging.FileHandler(log_file)
            fh.setLevel(level)
            fh.setFormatter(formatter)
            logger.addHandler(fh)
    return logger


def set_level(level: int | str, name: Optional[str] = None) -> None:
    """Change the level of an already configured logger and its handlers."""
    level = _resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
