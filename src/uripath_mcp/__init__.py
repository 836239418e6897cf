"""uripath-mcp: URI path decomposition and reference resolution over MCP."""

__version__ = "0.1.0"
