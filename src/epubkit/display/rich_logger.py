"""Rich-based logger configuration for epubkit."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .constants import DATE_FORMAT, LOG_FORMAT, LOGGER_NAME, VALID_LOG_LEVELS


def setup_rich_logger(
    name: str = LOGGER_NAME,
    level: int | str = logging.INFO,
    show_time: bool = True,
    show_path: bool = False,
) -> logging.Logger:
    """
    Set up a Rich-based logger writing to stderr.

    Args:
        name: Logger name
        level: Logging level, as a number or a level name (default: INFO)
        show_time: Show timestamp in logs
        show_path: Show file path in logs

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    console = Console(stderr=True)

    rich_handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        log_time_format=DATE_FORMAT,
        rich_tracebacks=True,
        markup=False,
    )
    rich_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()  # Clear any existing handlers
    logger.addHandler(rich_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger in the epubkit namespace.

    Module names (``epubkit.readers.package``) are used as-is; any other
    name is nested under the package logger.
    """
    if name != LOGGER_NAME and not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: str, logger_name: str = LOGGER_NAME) -> None:
    """
    Set the log level for an existing logger and its handlers.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: The name of the logger to modify
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)

    for handler in logger.handlers:
        handler.setLevel(numeric_level)


def get_valid_log_levels() -> list[str]:
    """Return a list of valid log level names."""
    return list(VALID_LOG_LEVELS)
