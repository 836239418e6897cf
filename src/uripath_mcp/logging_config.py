"""Logging configuration for uripath-mcp.

JSON lines go to stderr by default, since stdout carries the MCP stdio
transport. A human-readable rotating file log is available for development.

IMPORTANT: No logging at import time. All logging setup must happen explicitly
via setup_logging().
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Config

# Request ID for correlation across async operations
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

# Extra record attributes copied into JSON output
EXTRA_FIELDS = ("uri", "path", "strategy", "duration", "error_code")


class JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Always carries timestamp, level, logger and message. request_id is added
    inside a tool call, and any EXTRA_FIELDS attribute set through `extra=`
    is copied when it is not None.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if request_id := request_id_var.get():
            log_obj["request_id"] = request_id

        for key in EXTRA_FIELDS:
            if (value := getattr(record, key, None)) is not None:
                log_obj[key] = value

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


class RequestIdFilter(logging.Filter):
    """Stamp each record with the current tool call's request_id.

    Records logged outside a tool call (startup, shutdown) get "-" so the
    file format can always include the field.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"  # type: ignore[attr-defined]
        return True


def setup_logging(config: "Config") -> None:
    """Install handlers on the root logger according to config.log_mode.

    Existing root handlers are replaced, so calling this again reconfigures
    rather than duplicates output.

    Args:
        config: Configuration instance with logging settings

    Logging Modes:
        - "stderr": JSON lines to stderr (stdout is the MCP transport)
        - "file": request-id tagged text lines to a rotating file
        - "both": Both outputs
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level)

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    json_formatter = JsonFormatter()
    human_formatter = logging.Formatter(
        "%(asctime)s.%(msecs)03d [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    request_id_filter = RequestIdFilter()

    if config.log_mode in ("stderr", "both"):
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(json_formatter)
        stderr_handler.addFilter(request_id_filter)
        root_logger.addHandler(stderr_handler)

    if config.log_mode in ("file", "both"):
        log_file = _get_log_file(config)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setFormatter(human_formatter)
        file_handler.addFilter(request_id_filter)
        root_logger.addHandler(file_handler)

    logging.getLogger("uripath_mcp").setLevel(config.log_level)

    # MCP SDK per-request lines only at DEBUG
    logging.getLogger("mcp").setLevel(logging.DEBUG if config.log_level == "DEBUG" else logging.WARNING)

    logging.info(
        "Logging initialized",
        extra={
            "log_mode": config.log_mode,
            "log_level": config.log_level,
        },
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the uripath_mcp namespace.

    Args:
        name: Logger name (e.g., "uri.resolver")

    Returns:
        Logger instance for "uripath_mcp.<name>"

    Example:
        >>> logger = get_logger("uri.resolver")
        >>> logger.name
        'uripath_mcp.uri.resolver'
    """
    return logging.getLogger(f"uripath_mcp.{name}")


def _get_log_file(config: "Config") -> Path:
    """Get log file path, auto-determining if not specified."""
    if config.log_file:
        return config.log_file

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return _get_log_directory() / f"uripath-mcp-{timestamp}.log"


def _get_log_directory() -> Path:
    """Get platform-appropriate log directory."""
    if sys.platform == "win32":
        return Path.home() / "AppData" / "Local" / "uripath-mcp" / "logs"
    return Path.home() / ".uripath-mcp" / "logs"
