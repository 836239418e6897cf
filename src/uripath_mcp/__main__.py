"""Command-line entry point: ``uripath-mcp`` or ``python -m uripath_mcp``.

Configuration is read and logging installed before the server module is
imported, so FastMCP finds the root logger already configured.
"""

import sys

from . import __version__


def main() -> int:
    """
    Start the uripath-mcp server on the stdio transport.

    Returns:
        0 when the server exits normally, 2 when the URIPATH_MCP_* environment
        is invalid
    """
    from .config import get_config
    from .logging_config import get_logger, setup_logging

    try:
        config = get_config()
    except ValueError as e:
        # stdout carries the MCP transport
        print(f"uripath-mcp: invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(config)
    if config.composite_schemes is None:
        composite = "any"
    else:
        composite = ", ".join(sorted(config.composite_schemes)) or "none"
    get_logger("main").info(f"Starting uripath-mcp {__version__} (composite schemes: {composite})")

    from .server import mcp

    mcp.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
