"""Session management package."""
from mupdf_mcp.sessions.manager import SessionManager
from mupdf_mcp.sessions.registry import SessionInfo, SessionRecord, SessionRegistry

__all__ = ["SessionManager", "SessionRegistry", "SessionRecord", "SessionInfo"]
