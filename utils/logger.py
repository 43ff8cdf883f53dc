"""
AI Image Detector Logger
Logging setup shared by the CLI, the GUI and the detection package.
"""

import logging
import sys
from functools import wraps
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Callable, List, Optional

from config import LOGGING_SETTINGS

# console handlers created by setup_logger, so their level can be changed later
_console_handlers: List[logging.Handler] = []
_console_level: Optional[int] = None


def _level_value(level) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def setup_logger(name, level=None):
    """
    Create and configure a logger.

    Args:
        name: logger name (normally ``__name__``)
        level: log level name; falls back to ``LOGGING_SETTINGS['level']``

    Returns:
        logging.Logger: configured logger
    """
    logger = logging.getLogger(name)

    # handlers are attached once per logger name
    if logger.handlers:
        return logger

    if level is None:
        level = LOGGING_SETTINGS.get("level", "INFO")
    numeric_level = _level_value(level)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if LOGGING_SETTINGS.get("file_logging", True):
        log_dir = Path(LOGGING_SETTINGS.get("log_dir", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LOGGING_SETTINGS.get("log_file", "aidetector.log")

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOGGING_SETTINGS.get("max_bytes", 2 * 1024 * 1024),
            backupCount=LOGGING_SETTINGS.get("backup_count", 3),
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(_console_level if _console_level is not None else numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    _console_handlers.append(console_handler)

    return logger


def set_console_level(level) -> None:
    """Change the level of every console handler, including ones created later.

    The rotating log file keeps its configured level.
    """
    global _console_level

    _console_level = _level_value(level)
    for handler in _console_handlers:
        handler.setLevel(_console_level)


def log_operation(operation_name: str):
    """Decorator that logs start, completion and failure of an operation.

    Usage: ``@log_operation("Analyze Image")``
    """

    if not isinstance(operation_name, str):
        raise TypeError("log_operation must be used as a decorator with an operation name")

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(func.__module__)
            logger.info(f"[{operation_name}] Started")
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.error(f"[{operation_name}] FAILED: {exc}", exc_info=True)
                raise
            logger.info(f"[{operation_name}] Completed")
            return result

        return wrapper

    return decorator
