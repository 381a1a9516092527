"""
Logger module for mupdf-mcp

This module provides a flexible logging interface that allows users to
drop in their own logger implementations.

Usage:
    from mupdf_mcp.logger import Logger, DefaultLogger

    # Use the default logger
    logger = DefaultLogger()
    logger.info("Application started", transport="stdio")

    # Or implement your own
    class MyCustomLogger(Logger):
        def info(self, message: str, **kwargs):
            # Your custom implementation
            pass
"""

import logging

from mupdf_mcp.config import Config
from mupdf_mcp.exceptions.base import ConfigurationError

from .console_logger import ConsoleLogger
from .default_logger import DefaultLogger
from .interface import Logger

try:
    _level = Config.get_log_level()
except ConfigurationError:
    # Reported by the entrypoint when it loads the full configuration
    _level = logging.INFO

# Shared logger instance for modules that just need basic console logging
session_logger: Logger = ConsoleLogger(level=_level)

__all__ = [
    "Logger",
    "DefaultLogger",
    "ConsoleLogger",
    "session_logger",
]
