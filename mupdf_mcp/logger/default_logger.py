"""Logger backed by the standard library ``logging`` module."""

import logging
from typing import Any, Optional

from .interface import Logger


def format_context(message: str, context: dict) -> str:
    """Render ``message`` followed by ``key=value`` pairs in call order."""
    if not context:
        return message
    pairs = " ".join(f"{key}={value!r}" for key, value in context.items())
    return f"{message} | {pairs}"


class DefaultLogger(Logger):
    """Forwards to a named ``logging.Logger`` and leaves handler setup to the host."""

    def __init__(self, name: str = "mupdf_mcp", level: Optional[int] = None) -> None:
        self._logger = logging.getLogger(name)
        if level is not None:
            self._logger.setLevel(level)

    @property
    def name(self) -> str:
        return self._logger.name

    def set_level(self, level: int) -> None:
        self._logger.setLevel(level)

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, format_context(message, kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, **kwargs)
