"""
Logging setup for i18n-routes.

Console output goes through rich; a rotating log file is added when the
configuration names one.
"""

from __future__ import annotations

import logging
import logging.handlers

from rich.console import Console
from rich.logging import RichHandler

from i18n_routes.config import LoggingConfig

LOGGER_NAME = "i18n_routes"
CONSOLE_FORMAT = "[i18n] %(message)s"


def setup_logging(
    config: LoggingConfig | None = None,
    *,
    debug: bool = False,
    console: Console | None = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        config: Logging configuration. Defaults are used if None.
        debug: Verbose mode, lowers the console level to DEBUG.
        console: Rich console for output. If None, stderr is used.

    Returns:
        The configured `i18n_routes` logger.
    """
    config = config or LoggingConfig()
    level = logging.DEBUG if debug else logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if config.file is not None:
        config.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            config.file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(config.format))
        logger.addHandler(file_handler)

    return logger
