"""Runtime configuration read from ``MUPDF_MCP_*`` environment variables.

See ``mupdf_mcp.config_docs`` for the full reference of variables and defaults.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from mupdf_mcp.config_docs import (
    DEFAULT_ENGINE_WORKERS,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_RENDER_SCALE,
    DEFAULT_MCP_PORT,
    DEFAULT_SEARCH_HIT_MAX,
    DEFAULT_TRANSPORT,
    ENV_PREFIX,
    TRANSPORTS,
)
from mupdf_mcp.exceptions.base import ConfigurationError


@dataclass(frozen=True)
class ServerSettings:
    """Resolved settings for one server process."""

    transport: str = DEFAULT_TRANSPORT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_MCP_PORT
    log_level: int = logging.INFO
    engine_workers: int = DEFAULT_ENGINE_WORKERS
    search_hit_max: int = DEFAULT_SEARCH_HIT_MAX
    max_render_scale: float = DEFAULT_MAX_RENDER_SCALE


def _env(name: str) -> Optional[str]:
    raw = os.environ.get(f"{ENV_PREFIX}_{name}")
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def _parse_positive_int_env(name: str, default: int, minimum: int = 1) -> int:
    """Parse a positive integer from an environment variable with fallback."""
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{ENV_PREFIX}_{name} must be an integer, got '{raw}'",
            details={"variable": f"{ENV_PREFIX}_{name}", "value": raw},
        ) from exc
    if value < minimum:
        raise ConfigurationError(
            f"{ENV_PREFIX}_{name} must be >= {minimum}, got {value}",
            details={"variable": f"{ENV_PREFIX}_{name}", "value": raw},
        )
    return value


def parse_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level '{value}'",
            details={"valid_levels": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]},
        )
    return level


class Config:
    """Accessors for environment-driven configuration."""

    @classmethod
    def get_transport(cls) -> str:
        transport = (_env("TRANSPORT") or DEFAULT_TRANSPORT).lower()
        if transport not in TRANSPORTS:
            raise ConfigurationError(
                f"Unknown transport '{transport}'",
                details={"valid_transports": list(TRANSPORTS)},
            )
        return transport

    @classmethod
    def get_host(cls) -> str:
        return _env("HOST") or DEFAULT_HOST

    @classmethod
    def get_port(cls) -> int:
        return _parse_positive_int_env("PORT", DEFAULT_MCP_PORT)

    @classmethod
    def get_log_level(cls) -> int:
        return parse_log_level(_env("LOG_LEVEL") or DEFAULT_LOG_LEVEL)

    @classmethod
    def get_engine_workers(cls) -> int:
        return _parse_positive_int_env("ENGINE_WORKERS", DEFAULT_ENGINE_WORKERS)

    @classmethod
    def get_search_hit_max(cls) -> int:
        return _parse_positive_int_env("SEARCH_HIT_MAX", DEFAULT_SEARCH_HIT_MAX)

    @classmethod
    def get_max_render_scale(cls) -> float:
        raw = _env("MAX_RENDER_SCALE")
        if raw is None:
            return DEFAULT_MAX_RENDER_SCALE
        try:
            value = float(raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"{ENV_PREFIX}_MAX_RENDER_SCALE must be a number, got '{raw}'"
            ) from exc
        if value <= 0:
            raise ConfigurationError(f"{ENV_PREFIX}_MAX_RENDER_SCALE must be > 0, got {value}")
        return value

    @classmethod
    def load(cls) -> ServerSettings:
        """Snapshot every setting from the environment."""
        return ServerSettings(
            transport=cls.get_transport(),
            host=cls.get_host(),
            port=cls.get_port(),
            log_level=cls.get_log_level(),
            engine_workers=cls.get_engine_workers(),
            search_hit_max=cls.get_search_hit_max(),
            max_render_scale=cls.get_max_render_scale(),
        )
