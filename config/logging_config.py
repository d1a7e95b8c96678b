"""
Centralized logging configuration.

All Auto-MQM loggers hang below one 'auto_mqm' logger that owns the
handlers; module loggers only propagate to it.
"""
import logging
import logging.handlers
from typing import Optional, Union

from .constants import LOG_FORMAT, LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
from .settings import settings

ROOT_LOGGER_NAME = 'auto_mqm'
LOG_FILE_NAME = 'mqm.log'


def setup_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get the package logger, attaching its handlers on first use.

    Console output follows settings.log_level; the rotating file in
    settings.logs_dir always receives DEBUG.

    Usage:
        from config.logging_config import setup_logger
        logger = setup_logger()
        logger.info("Message here")

    Args:
        name: Logger name. If None, uses 'auto_mqm'.

    Returns:
        Configured logging.Logger instance.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)

    # Handlers are attached once, on the package logger only
    if not root.handlers:
        root.setLevel(logging.DEBUG)

        console = logging.StreamHandler()
        console.setLevel(_level(settings.log_level))
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(console)

        if settings.log_to_file:
            settings.logs_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                settings.logs_dir / LOG_FILE_NAME,
                maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(file_handler)

    if not name or name == ROOT_LOGGER_NAME:
        return root
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Module logger below 'auto_mqm'.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)   # -> 'auto_mqm.mqm.pipeline'
    """
    return setup_logger(name)


def set_console_level(level: Union[int, str]) -> None:
    """Change console verbosity at runtime (the CLI's --verbose)"""
    for handler in setup_logger().handlers:
        if not isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.setLevel(_level(level))


def _level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


# Singleton logger for quick imports
# Usage: from config.logging_config import logger
logger = setup_logger()
