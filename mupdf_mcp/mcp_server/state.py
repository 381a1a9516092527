from __future__ import annotations

from typing import Optional

from mupdf_mcp.oneshot import OneshotRunner
from mupdf_mcp.sessions import SessionManager, SessionRegistry

from mupdf_mcp.mcp_server.components import ServerComponents

components: Optional[ServerComponents] = None


def set_components(value: Optional[ServerComponents]) -> None:
    global components
    components = value


def require_components() -> None:
    if components is None:
        raise RuntimeError("Server components have not been initialised")


def get_components() -> Optional[ServerComponents]:
    return components


def ensure_registry() -> SessionRegistry:
    require_components()
    assert components is not None
    return components.registry


def ensure_manager() -> SessionManager:
    require_components()
    assert components is not None
    return components.session_manager


def ensure_oneshot() -> OneshotRunner:
    require_components()
    assert components is not None
    return components.oneshot_runner
