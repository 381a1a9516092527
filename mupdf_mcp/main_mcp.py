import argparse
import asyncio
import dataclasses
import sys

from mupdf_mcp.config import Config, parse_log_level
from mupdf_mcp.config_docs import TRANSPORTS
from mupdf_mcp.exceptions import ConfigurationError
from mupdf_mcp.logger import DefaultLogger, Logger, session_logger

logger: Logger = session_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="MuPDF MCP Server - Read PDF and other documents via Model Context Protocol"
    )
    parser.add_argument(
        "--transport",
        type=str,
        choices=TRANSPORTS,
        default=None,
        help="Transport to serve (default: stdio, or MUPDF_MCP_TRANSPORT env var)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host address to bind to for http (default: 127.0.0.1, or MUPDF_MCP_HOST env var)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port number to listen on for http (default: 8020, or MUPDF_MCP_PORT env var)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: INFO, or MUPDF_MCP_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--engine-workers",
        type=int,
        default=None,
        help="Threads running document engine calls (default: 1, or MUPDF_MCP_ENGINE_WORKERS env var)",
    )
    return parser


def resolve_settings(args: argparse.Namespace):
    """Environment settings with command line flags applied on top."""
    settings = Config.load()
    overrides = {}
    if args.transport is not None:
        overrides["transport"] = args.transport
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        if not (1 <= args.port <= 65535):
            raise ConfigurationError(f"--port {args.port} out of valid range (1-65535)")
        overrides["port"] = args.port
    if args.log_level is not None:
        overrides["log_level"] = parse_log_level(args.log_level)
    if args.engine_workers is not None:
        if args.engine_workers < 1:
            raise ConfigurationError(f"--engine-workers must be >= 1, got {args.engine_workers}")
        overrides["engine_workers"] = args.engine_workers
    return dataclasses.replace(settings, **overrides)


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args)
    except ConfigurationError as e:
        logger.error("FATAL: Invalid configuration", error=e.message, details=e.details)
        sys.exit(2)

    if isinstance(logger, DefaultLogger):
        logger.set_level(settings.log_level)

    from mupdf_mcp.mcp_server.server import main as serve

    try:
        logger.info(
            "Starting MCP server",
            transport=settings.transport,
            host=settings.host,
            port=settings.port,
            engine_workers=settings.engine_workers,
        )
        asyncio.run(serve(settings))
        logger.info("MCP server shutdown complete")
    except KeyboardInterrupt:
        logger.info("Shutdown complete")
        sys.exit(0)
    except Exception as e:
        logger.error("Failed to start server", error=str(e), error_type=type(e).__name__)
        sys.exit(1)


if __name__ == "__main__":
    main()
