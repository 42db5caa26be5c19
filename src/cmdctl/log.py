"""Logging configuration for cmdctl.

Installs console (and optionally file) handlers on the package logger and
provides helpers to log handler failures with full tracebacks while handing
back a clean message for display.
"""
from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Optional

LOGGER_NAME = "cmdctl"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handlers installed by configure_logging
_handlers: list[logging.Handler] = []


def configure_logging(
    level: int | str = logging.WARNING,
    log_file: Optional[Path | str] = None,
) -> logging.Logger:
    """Configure the cmdctl logger.

    Replaces any handlers installed by a previous call.

    Args:
        level: Logging level (int or name like "DEBUG")
        log_file: Optional file to append full logs to

    Returns:
        The package logger
    """
    close_logging()

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)
    _handlers.append(console)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        _handlers.append(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(level)

    return logger


def close_logging() -> None:
    """Remove and close handlers installed by configure_logging."""
    logger = logging.getLogger(LOGGER_NAME)
    while _handlers:
        handler = _handlers.pop()
        logger.removeHandler(handler)
        handler.close()


def log_exception(
    error: BaseException,
    context: str = "",
    logger: Optional[logging.Logger] = None,
) -> str:
    """Log an exception with its traceback and return a user-friendly message.

    The context and traceback are logged at DEBUG, below the default
    console level; a configured log file still receives them. The
    returned message is "<ExceptionType>: <message>".

    Args:
        error: The exception to log
        context: What was happening (e.g. which command ran)
        logger: Logger to use (default: package logger)

    Returns:
        Message without traceback, suitable for display
    """
    logger = logger or logging.getLogger(LOGGER_NAME)

    error_type = type(error).__name__
    error_msg = str(error)
    user_msg = f"{error_type}: {error_msg}" if error_msg else error_type

    tb_str = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    if context:
        logger.debug(f"{context}\n{user_msg}\n\nTraceback:\n{tb_str}")
    else:
        logger.debug(f"{user_msg}\n\nTraceback:\n{tb_str}")

    return user_msg
