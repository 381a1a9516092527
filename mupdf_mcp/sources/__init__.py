"""Document source resolution."""

from mupdf_mcp.sources.resolver import ResolvedSource, decode_base64, resolve_source

__all__ = ["ResolvedSource", "decode_base64", "resolve_source"]
