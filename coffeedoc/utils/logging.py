"""Logging setup for the CoffeeScript documenter.

Every module logs through ``logging.getLogger(__name__)``, so all of them
hang off the ``coffeedoc`` package logger configured here.
"""

import logging
import sys
from typing import Optional

from coffeedoc.utils.config import LoggingConfig

PACKAGE_LOGGER = "coffeedoc"


def _attach(
    logger: logging.Logger, handler: logging.Handler, level: int, fmt: str
) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def setup_logging(
    level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure the package logger with console and optional file output.

    Existing handlers are removed first, so repeated calls do not
    duplicate log lines.

    Args:
        level: Logging level name; unknown names fall back to INFO.
        log_format: Format string for log messages.
        log_file: Optional file that receives the same records as stdout.

    Returns:
        The configured ``coffeedoc`` logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    package_logger.setLevel(numeric_level)

    console = logging.StreamHandler(sys.stdout)
    _attach(package_logger, console, numeric_level, log_format)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        _attach(package_logger, file_handler, numeric_level, log_format)

    package_logger.debug("Logging initialized at level %s", level)
    return package_logger


def setup_logging_from_config(config: LoggingConfig) -> logging.Logger:
    """Configure logging from the ``logging`` section of the app config."""
    return setup_logging(
        level=config.level, log_format=config.format, log_file=config.file
    )
