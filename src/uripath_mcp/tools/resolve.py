"""Resolve tool implementation.

This module provides the resolve_uri MCP tool, which resolves a reference
against a context URI, including '!'-delimited archive URIs and UNC-style
file URIs.
"""

import time
import uuid
from typing import Any

from ..config import get_config
from ..logging_config import get_logger, request_id_var
from ..metrics import get_metrics_collector
from ..uri import URIError, resolve
from ..validation import ValidationError, validate_uri_text

logger = get_logger("tools.resolve")


async def resolve_uri(context: str, reference: str) -> dict[str, Any]:
    """
    Resolve a reference against a context URI.

    Args:
        context: Base URI (e.g. "jar:file:///a/b.jar!/c")
        reference: Relative or absolute reference (e.g. "d/e")

    Returns:
        Discriminated union dict with status field:

        Success:
            {
                "status": "success",
                "uri": "jar:file:///a/b.jar!/d/e",
                "scheme": "jar",
                "authority": null,
                "path": "file:///a/b.jar!/d/e",
                "query": null,
                "fragment": null
            }

        Error:
            {
                "status": "error",
                "error_code": "validation_error" | "uri_syntax_error" | ...,
                "message": "Human-readable error message"
            }
    """
    start_time = time.time()
    success = False
    token = request_id_var.set(uuid.uuid4().hex[:12])

    logger.info(f"resolve_uri called: context={context!r}, reference={reference!r}")

    try:
        config = get_config()
        try:
            validate_uri_text("context", context, max_length=config.max_input_length)
            validate_uri_text("reference", reference, max_length=config.max_input_length)
        except ValidationError as e:
            logger.warning(f"Input validation failed: {e}")
            return e.to_error_response()

        try:
            result = resolve(context, reference, composite_schemes=config.composite_schemes)
        except URIError as e:
            logger.warning(f"Resolution failed: {e}", extra={"error_code": e.error_code})
            return e.to_error_response()
        except ValueError as e:
            logger.warning(f"URI syntax error: {e}", extra={"error_code": "uri_syntax_error"})
            return {
                "status": "error",
                "error_code": "uri_syntax_error",
                "message": str(e),
            }

        success = True
        logger.info("Resolution complete", extra={"uri": str(result)})
        return {
            "status": "success",
            "uri": str(result),
            "scheme": result.scheme,
            "authority": result.authority,
            "path": result.path,
            "query": result.query,
            "fragment": result.fragment,
        }

    except Exception as e:
        logger.error(f"Unexpected error during resolve_uri: {e}", exc_info=True)
        return {
            "status": "error",
            "error_code": "execution_error",
            "message": f"Unexpected error during resolve_uri: {e}",
        }
    finally:
        duration_ms = (time.time() - start_time) * 1000
        await get_metrics_collector().record(
            operation="resolve",
            duration_ms=duration_ms,
            success=success,
        )
        request_id_var.reset(token)
