"""Path parsing tool implementation.

This module provides the parse_uri_path MCP tool, which decomposes a raw URI
path into segments, matrix parameters, directory name and file name.
"""

import time
import uuid
from typing import Any

from ..config import get_config
from ..logging_config import get_logger, request_id_var
from ..metrics import get_metrics_collector
from ..uri import URIError, URIPath
from ..validation import ValidationError, validate_uri_text

logger = get_logger("tools.parse_path")


async def parse_uri_path(path: str, from_uri: bool = False) -> dict[str, Any]:
    """
    Decompose a raw, percent-encoded URI path.

    Args:
        path: Raw path (e.g. "/a/b;type=i"), or a full URI when from_uri is set
        from_uri: Treat `path` as a URI and decompose its path component

    Returns:
        Discriminated union dict with status field:

        Success:
            {
                "status": "success",
                "raw": "a/b;x=y;z=",
                "is_absolute": false,
                "is_directory": false,
                "segments": ["a", "b"],
                "parameters": {"x": "y", "z": ""},
                "directory_name": "a/",
                "file_name": "b",
                "path": "a/b",
                "canonical": "a/b;x=y;z"
            }

        Error:
            {
                "status": "error",
                "error_code": "validation_error" | "malformed_percent_encoding" | ...,
                "message": "Human-readable error message"
            }
    """
    start_time = time.time()
    success = False
    token = request_id_var.set(uuid.uuid4().hex[:12])

    logger.info(f"parse_uri_path called: path={path!r}, from_uri={from_uri}")

    try:
        config = get_config()
        try:
            validate_uri_text("path", path, max_length=config.max_input_length)
        except ValidationError as e:
            logger.warning(f"Input validation failed: {e}")
            return e.to_error_response()

        try:
            uri_path = URIPath.from_uri(path) if from_uri else URIPath.parse(path)
        except URIError as e:
            logger.warning(f"Path decomposition failed: {e}", extra={"error_code": e.error_code})
            return e.to_error_response()
        except ValueError as e:
            logger.warning(f"URI syntax error: {e}", extra={"error_code": "uri_syntax_error"})
            return {
                "status": "error",
                "error_code": "uri_syntax_error",
                "message": str(e),
            }

        success = True
        logger.info(
            f"Path decomposed: {len(uri_path.segments)} segment(s), "
            f"{len(uri_path.parameters)} parameter(s)",
            extra={"path": uri_path.raw},
        )
        return {
            "status": "success",
            "raw": uri_path.raw,
            "is_absolute": uri_path.is_absolute,
            "is_directory": uri_path.is_directory,
            "segments": list(uri_path.segments),
            "parameters": dict(uri_path.parameters),
            "directory_name": uri_path.directory_name,
            "file_name": uri_path.file_name,
            "path": uri_path.path,
            "canonical": uri_path.canonical(),
        }

    except Exception as e:
        logger.error(f"Unexpected error during parse_uri_path: {e}", exc_info=True)
        return {
            "status": "error",
            "error_code": "execution_error",
            "message": f"Unexpected error during parse_uri_path: {e}",
        }
    finally:
        duration_ms = (time.time() - start_time) * 1000
        await get_metrics_collector().record(
            operation="parse_path",
            duration_ms=duration_ms,
            success=success,
        )
        request_id_var.reset(token)
