"""MCP tool implementations."""

from .health_check import health_check
from .parse_path import parse_uri_path
from .resolve import resolve_uri

__all__ = [
    "health_check",
    "parse_uri_path",
    "resolve_uri",
]
