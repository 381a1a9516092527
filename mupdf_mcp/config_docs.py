"""Centralized configuration documentation and defaults for the MuPDF MCP server.

This module provides an overview of all configuration options and their
environment variable mappings.
"""

# =============================================================================
# ENVIRONMENT VARIABLES REFERENCE
# =============================================================================

# Transport
# ---------
# MUPDF_MCP_TRANSPORT: "stdio" (default) or "http" (Streamable HTTP on /mcp/)
# MUPDF_MCP_HOST: Bind address for the http transport (default: 127.0.0.1)
# MUPDF_MCP_PORT: Port for the http transport (default: 8020)
#
# Document engine
# ---------------
# MUPDF_MCP_ENGINE_WORKERS: Threads running MuPDF calls (default: 1)
#   Per-document operations are always serialized. Values above 1 let
#   different documents run in parallel and rely on the engine's own
#   thread-safety.
# MUPDF_MCP_SEARCH_HIT_MAX: Default cap on search hits per page (default: 100)
# MUPDF_MCP_MAX_RENDER_SCALE: Largest accepted render scale (default: 8.0)
#
# Development & Testing
# ---------------------
# MUPDF_MCP_LOG_LEVEL: Logging verbosity (default: INFO)
#   Values: DEBUG, INFO, WARNING, ERROR, CRITICAL

# =============================================================================
# CONFIGURATION DEFAULTS
# =============================================================================

ENV_PREFIX = "MUPDF_MCP"

TRANSPORTS = ("stdio", "http")
DEFAULT_TRANSPORT = "stdio"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_MCP_PORT = 8020
DEFAULT_LOG_LEVEL = "INFO"

DEFAULT_ENGINE_WORKERS = 1
DEFAULT_SEARCH_HIT_MAX = 100
DEFAULT_MAX_RENDER_SCALE = 8.0

# =============================================================================
# CONFIGURATION HELPER FUNCTIONS
# =============================================================================


def get_config_summary() -> dict:
    """Get a summary of current configuration from environment.

    Returns:
        Dictionary with current configuration values
    """
    import logging

    from mupdf_mcp.config import Config

    settings = Config.load()
    return {
        "transport": settings.transport,
        "host": settings.host,
        "port": settings.port,
        "log_level": logging.getLevelName(settings.log_level),
        "engine_workers": settings.engine_workers,
        "search_hit_max": settings.search_hit_max,
        "max_render_scale": settings.max_render_scale,
    }


def validate_configuration() -> tuple[bool, list[str]]:
    """Validate current configuration for completeness and consistency.

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    from mupdf_mcp.config import Config
    from mupdf_mcp.exceptions.base import ConfigurationError

    errors = []
    for getter in (
        Config.get_transport,
        Config.get_host,
        Config.get_port,
        Config.get_log_level,
        Config.get_engine_workers,
        Config.get_search_hit_max,
        Config.get_max_render_scale,
    ):
        try:
            getter()
        except ConfigurationError as exc:
            errors.append(exc.message)

    try:
        port = Config.get_port()
        if not (1 <= port <= 65535):
            errors.append(f"{ENV_PREFIX}_PORT={port} out of valid range (1-65535)")
    except ConfigurationError:
        pass  # already reported above

    return len(errors) == 0, errors


def print_configuration_help() -> None:
    """Print configuration help to stderr."""
    import sys

    help_text = f"""
MUPDF MCP SERVER CONFIGURATION REFERENCE
========================================

TRANSPORT
  {ENV_PREFIX}_TRANSPORT          stdio | http            Default: {DEFAULT_TRANSPORT}
  {ENV_PREFIX}_HOST               http bind address       Default: {DEFAULT_HOST}
  {ENV_PREFIX}_PORT               http port               Default: {DEFAULT_MCP_PORT}

DOCUMENT ENGINE
  {ENV_PREFIX}_ENGINE_WORKERS     MuPDF worker threads    Default: {DEFAULT_ENGINE_WORKERS}
  {ENV_PREFIX}_SEARCH_HIT_MAX     search hits per page    Default: {DEFAULT_SEARCH_HIT_MAX}
  {ENV_PREFIX}_MAX_RENDER_SCALE   largest render scale    Default: {DEFAULT_MAX_RENDER_SCALE}

LOGGING
  {ENV_PREFIX}_LOG_LEVEL          DEBUG | INFO | WARNING | ERROR | CRITICAL
                                  Default: {DEFAULT_LOG_LEVEL}

QUICK START
  mupdf-mcp-server                              # stdio, for desktop agents
  mupdf-mcp-server --transport http --port 8020 # Streamable HTTP on /mcp/
"""
    print(help_text, file=sys.stderr)


if __name__ == "__main__":
    import json
    import sys

    print_configuration_help()
    is_valid, errors = validate_configuration()
    if is_valid:
        print(json.dumps(get_config_summary(), indent=2), file=sys.stderr)
    else:
        print("Configuration errors:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
