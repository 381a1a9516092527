"""Console logger writing to stderr.

stdout belongs to the MCP stdio transport, so nothing here may write to it.
"""

import logging
import sys

from .default_logger import DefaultLogger

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class ConsoleLogger(DefaultLogger):
    """DefaultLogger with its own stderr handler attached."""

    def __init__(self, name: str = "mupdf_mcp", level: int = logging.INFO) -> None:
        super().__init__(name=name, level=level)
        underlying = logging.getLogger(name)
        # One handler per logger name, however many instances are created
        if not any(getattr(h, "_mupdf_mcp_console", False) for h in underlying.handlers):
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            handler._mupdf_mcp_console = True  # type: ignore[attr-defined]
            underlying.addHandler(handler)
        underlying.propagate = False
