"""Component initialization for the MCP server.

This module centralizes initialization of the engine executor, session
registry and dispatchers used by tool handlers.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from mupdf_mcp.config import ServerSettings
from mupdf_mcp.logger import Logger
from mupdf_mcp.oneshot import OneshotRunner
from mupdf_mcp.sessions import SessionManager, SessionRegistry


@dataclass
class ServerComponents:
    settings: ServerSettings
    executor: ThreadPoolExecutor
    registry: SessionRegistry
    session_manager: SessionManager
    oneshot_runner: OneshotRunner


def initialize_components(*, settings: ServerSettings, logger: Logger) -> ServerComponents:
    """Initialize all server components.

    Args:
            settings: Resolved server settings
            logger: Logger
    """
    executor = ThreadPoolExecutor(
        max_workers=settings.engine_workers, thread_name_prefix="mupdf-engine"
    )
    registry = SessionRegistry(executor=executor, logger=logger)
    session_manager = SessionManager(
        registry=registry,
        executor=executor,
        settings=settings,
        logger=logger,
    )
    oneshot_runner = OneshotRunner(executor=executor, settings=settings, logger=logger)
    logger.info(
        "Server components initialized",
        engine_workers=settings.engine_workers,
        search_hit_max=settings.search_hit_max,
        max_render_scale=settings.max_render_scale,
    )

    return ServerComponents(
        settings=settings,
        executor=executor,
        registry=registry,
        session_manager=session_manager,
        oneshot_runner=oneshot_runner,
    )


async def shutdown_components(components: ServerComponents, logger: Logger) -> None:
    """Close every open document and stop the engine executor."""
    closed = await components.registry.close_all()
    components.executor.shutdown(wait=True, cancel_futures=True)
    logger.info("Server components shut down", documents_closed=closed)
