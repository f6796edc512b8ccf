"""Logging configuration for Budgie.

CLI output and engine diagnostics share the ``budgie`` logger: the console
shows bare messages at the configured level, and a dated file under the
configured log directory keeps timestamped records.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional
from config import Config

LOGGER_NAME = "budgie"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_path(config: Config, day: Optional[date] = None) -> Path:
    """Get the log file for a day, ``<log_dir>/budgie-YYYY-MM-DD.log``."""
    day = day or date.today()
    return config.log_dir / f"{LOGGER_NAME}-{day.isoformat()}.log"


def setup_logging(config: Config, console: bool = True) -> logging.Logger:
    """Set up application logging from the budgie config.

    Args:
        config: Application configuration; ``log_level`` and ``log_dir``
            are used.
        console: Whether to echo messages to the terminal. Turned off when
            only the file record is wanted.

    Returns:
        Configured logger instance.

    Raises:
        ValueError: If ``log_level`` is not a logging level name.
    """
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.log_level}")

    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    file_handler = logging.FileHandler(get_log_path(config))
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger(LOGGER_NAME)
