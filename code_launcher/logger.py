"""
Logging setup for the code_launcher package.

Only the package logger is configured, so an application embedding the
catalogs keeps its own root handlers. Skipped workspace records are logged
at DEBUG by code_launcher.workspace_catalog and show up with --verbose.
"""

import logging
import sys
from pathlib import Path

from .config import LogConfig

PACKAGE_LOGGER = "code_launcher"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(threadName)s - %(name)s - %(message)s"

# Handlers installed by setup_logging, replaced on the next call
_installed_handlers: list[logging.Handler] = []


def _remove_installed_handlers(package_logger: logging.Logger) -> None:
    while _installed_handlers:
        handler = _installed_handlers.pop()
        package_logger.removeHandler(handler)
        handler.close()


def setup_logging(config: LogConfig) -> logging.Logger:
    """
    Attach handlers described by config to the code_launcher logger.

    Calling it again replaces the handlers from the previous call and
    leaves every other handler alone.

    Args:
        config: Level name (unknown names mean WARNING), optional log file
            (its directory is created) and whether to log to stderr.

    Returns:
        The configured package logger.
    """
    level = getattr(logging, config.level.upper(), logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_installed_handlers(package_logger)
    package_logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = []

    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode="a", encoding="utf-8"))

    if config.console:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        _installed_handlers.append(handler)

    return package_logger
