"""
Configuration module for Auto-MQM.
"""
from .constants import *
from .settings import Settings, settings
from .logging_config import setup_logger, get_logger, set_console_level, logger

__all__ = [
    # Settings
    'Settings',
    'settings',
    # Logging
    'setup_logger',
    'get_logger',
    'set_console_level',
    'logger',
    # Constants (all exported via *)
]
