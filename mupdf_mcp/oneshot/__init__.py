"""Single-call document access without sessions."""

from mupdf_mcp.oneshot.runner import OneshotRunner

__all__ = ["OneshotRunner"]
