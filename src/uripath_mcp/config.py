"""Runtime configuration management.

Environment Variables:
    URIPATH_MCP_LOG_LEVEL: Logging level (default: INFO)
    URIPATH_MCP_LOG_MODE: Logging mode: stderr, file, both (default: stderr)
    URIPATH_MCP_LOG_FILE: Log file path (optional, for file/both modes)
    URIPATH_MCP_ENABLE_HEALTH_CHECK: Enable health_check tool (default: true)
    URIPATH_MCP_COMPOSITE_SCHEMES: Comma-separated schemes whose '!' marks an
        inner path, e.g. "jar,zip" (default: None = any scheme)
    URIPATH_MCP_MAX_INPUT_LENGTH: Maximum length of tool string inputs (default: 8192)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast


@dataclass
class Config:
    """Runtime configuration for uripath-mcp."""

    log_level: str  # Logging level: DEBUG, INFO, WARNING, ERROR
    log_mode: Literal["stderr", "file", "both"]  # Logging mode
    log_file: Path | None  # Log file path (for file/both modes)
    enable_health_check: bool  # Enable health_check tool
    composite_schemes: frozenset[str] | None  # '!' split allow-list (None = any scheme)
    max_input_length: int  # Upper bound on tool input length


_config: Config | None = None


def load_config() -> Config:
    """
    Load configuration from environment variables.

    Validates all configuration values and returns a Config instance with
    defaults applied.

    Returns:
        Config instance with validated values

    Raises:
        ValueError: If configuration values are invalid
    """
    # Parse log level
    log_level = os.getenv("URIPATH_MCP_LOG_LEVEL", "INFO").upper()
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if log_level not in valid_levels:
        raise ValueError(
            f"URIPATH_MCP_LOG_LEVEL must be one of {valid_levels}, got: {log_level}"
        )

    # Parse log mode
    log_mode_str = os.getenv("URIPATH_MCP_LOG_MODE", "stderr").lower()
    valid_modes = {"stderr", "file", "both"}
    if log_mode_str not in valid_modes:
        raise ValueError(
            f"URIPATH_MCP_LOG_MODE must be one of {valid_modes}, got: {log_mode_str}"
        )
    # Type assertion: we validated above that log_mode_str is in valid_modes
    log_mode = cast(Literal["stderr", "file", "both"], log_mode_str)

    # Parse log file
    log_file = None
    if log_file_str := os.getenv("URIPATH_MCP_LOG_FILE"):
        log_file = Path(log_file_str).resolve()

    # Parse enable_health_check
    enable_health_check = os.getenv("URIPATH_MCP_ENABLE_HEALTH_CHECK", "true").lower() == "true"

    # Parse composite schemes (schemes are case-insensitive, urlsplit lowercases them)
    composite_schemes = None
    if composite_schemes_str := os.getenv("URIPATH_MCP_COMPOSITE_SCHEMES"):
        composite_schemes = frozenset(
            s.strip().lower() for s in composite_schemes_str.split(",") if s.strip()
        )

    # Parse max input length
    max_input_length_str = os.getenv("URIPATH_MCP_MAX_INPUT_LENGTH", "8192")
    try:
        max_input_length = int(max_input_length_str)
    except ValueError as e:
        raise ValueError(
            f"URIPATH_MCP_MAX_INPUT_LENGTH must be an integer, got: {max_input_length_str}"
        ) from e
    if max_input_length <= 0:
        raise ValueError(
            f"URIPATH_MCP_MAX_INPUT_LENGTH must be positive, got: {max_input_length}"
        )

    return Config(
        log_level=log_level,
        log_mode=log_mode,
        log_file=log_file,
        enable_health_check=enable_health_check,
        composite_schemes=composite_schemes,
        max_input_length=max_input_length,
    )


def get_config() -> Config:
    """
    Get singleton config instance.

    Loads configuration on first call and caches the result.

    Returns:
        Config instance (loads on first call)
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """
    Reset cached config (for testing only).

    This clears the singleton config instance, forcing load_config() to be
    called again on the next get_config() call.
    """
    global _config
    _config = None
