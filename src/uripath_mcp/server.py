"""FastMCP server for uripath-mcp.

NOTE: Do NOT initialize logging here at import time.
Logging is initialized in __main__.py to avoid import side effects.

Tools:
- parse_uri_path: Decompose a raw URI path
- resolve_uri: Resolve a reference against a context URI
- health_check: Server health and configuration
"""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP


def create_mcp_server() -> FastMCP:
    """Create and initialize the MCP server instance.

    Sets up logging only if nothing has configured the root logger yet, so
    creating the server repeatedly (e.g. in tests) adds no duplicate handlers.

    Returns:
        FastMCP server instance
    """
    root_logger = logging.getLogger()
    if not root_logger.hasHandlers():
        from .config import get_config
        from .logging_config import setup_logging

        setup_logging(get_config())

    return FastMCP("uripath-mcp")


# Create server instance
mcp = create_mcp_server()


@mcp.tool()
async def parse_uri_path(path: str, from_uri: bool = False) -> dict[str, Any]:
    """
    Decompose a raw, percent-encoded URI path into its parts.

    Percent-encoded delimiters (%2F, %3B, %3D) are never treated as
    delimiters. Matrix parameters are read from the final segment only.

    Args:
        path: Raw path such as "/a/b;type=i", or a full URI when from_uri is true
        from_uri: Treat path as a URI and decompose its path component

    Returns:
        Dictionary with status field indicating success or error.
        Success includes raw, is_absolute, is_directory, segments, parameters,
        directory_name, file_name, path and canonical.
        Error includes error_code and message.

    Example:
        For "a/b;x=y;z=":
        - segments: ["a", "b"]
        - parameters: {"x": "y", "z": ""}
        - directory_name: "a/", file_name: "b"
    """
    # Lazy import to avoid circular dependencies and import-time side effects
    from .tools.parse_path import parse_uri_path as parse_uri_path_impl

    return await parse_uri_path_impl(path, from_uri)


@mcp.tool()
async def resolve_uri(context: str, reference: str) -> dict[str, Any]:
    """
    Resolve a relative or absolute reference against a context URI.

    Follows RFC 3986 section 5, and also handles archive URIs such as
    "jar:file:///a/b.jar!/c" and UNC file URIs such as "file:////server/share/".

    Args:
        context: Base URI
        reference: Reference to resolve

    Returns:
        Dictionary with status field indicating success or error.
        Success includes uri plus its scheme, authority, path, query and fragment.
        Error includes error_code and message.

    Example:
        context "jar:file:///a/b.jar!/c", reference "d/e"
        - uri: "jar:file:///a/b.jar!/d/e"
    """
    from .tools.resolve import resolve_uri as resolve_uri_impl

    return await resolve_uri_impl(context, reference)


@mcp.tool()
async def health_check() -> dict[str, Any]:
    """
    Check server health and report configuration and metrics.

    Returns:
        Dictionary with status field ("healthy", "degraded" or "error").
        Healthy/degraded include config, uptime_seconds and metrics.
        Error includes error_code and message.
    """
    from .config import get_config
    from .tools.health_check import health_check as health_check_impl

    config = get_config()
    if not config.enable_health_check:
        return {
            "status": "error",
            "error_code": "disabled",
            "message": "Health check tool is disabled. Set URIPATH_MCP_ENABLE_HEALTH_CHECK=true to enable.",
        }

    return await health_check_impl()
