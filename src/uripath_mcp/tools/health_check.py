"""Health check tool implementation.

This module provides the health_check MCP tool, which reports configuration,
uptime and per-operation metrics, and runs a resolver self-test.
"""

from typing import Any

from ..config import get_config
from ..logging_config import get_logger
from ..metrics import get_metrics_collector
from ..uri import URIPath, resolve

logger = get_logger("tools.health_check")

# (context, reference, expected) triples exercising every resolution strategy
_SELF_TEST_CASES = (
    ("scheme://example.com/a/b/", "c", "scheme://example.com/a/b/c"),
    ("jar:file:///a/b.jar!/c", "d", "jar:file:///a/b.jar!/d"),
    ("file:////server/share/file", "a", "file:////server/share/a"),
)


def _run_self_test(composite_schemes: frozenset[str] | None) -> list[str]:
    """Run the resolver and path parser on known inputs.

    Returns:
        Diagnostic messages, empty when everything matched
    """
    diagnostics: list[str] = []

    for context, reference, expected in _SELF_TEST_CASES:
        scheme = context.partition(":")[0]
        if "!" in context and composite_schemes is not None and scheme not in composite_schemes:
            continue
        actual = str(resolve(context, reference, composite_schemes=composite_schemes))
        if actual != expected:
            diagnostics.append(f"resolve({context!r}, {reference!r}) returned {actual!r}, expected {expected!r}")

    sample = "a/b%3Bx=y;k=v"
    if str(URIPath.parse(sample)) != sample:
        diagnostics.append(f"URIPath round trip failed for {sample!r}")

    return diagnostics


async def health_check() -> dict[str, Any]:
    """
    Check server health.

    Returns:
        Success:
            {
                "status": "healthy",
                "config": {
                    "log_level": "INFO",
                    "log_mode": "stderr",
                    "composite_schemes": null,
                    "max_input_length": 8192,
                    "enable_health_check": true
                },
                "uptime_seconds": 123.45,
                "metrics": {"uptime_seconds": 123.45, "operations": [...]}
            }

        Degraded (self-test mismatch):
            {
                "status": "degraded",
                "diagnostics": ["resolve('...', '...') returned ..."],
                ...
            }

        Error:
            {
                "status": "error",
                "error_code": "execution_error",
                "message": "Human-readable error message"
            }
    """
    logger.info("health_check called")

    config = get_config()

    try:
        diagnostics = _run_self_test(config.composite_schemes)
    except Exception as e:
        logger.error(f"Self-test raised: {e}", exc_info=True)
        return {
            "status": "error",
            "error_code": "execution_error",
            "message": f"Resolver self-test failed: {e}",
        }

    for message in diagnostics:
        logger.warning(message)

    config_summary = {
        "log_level": config.log_level,
        "log_mode": config.log_mode,
        "composite_schemes": sorted(config.composite_schemes) if config.composite_schemes is not None else None,
        "max_input_length": config.max_input_length,
        "enable_health_check": config.enable_health_check,
    }

    metrics_collector = get_metrics_collector()
    uptime_seconds = round(metrics_collector.uptime_seconds(), 2)

    response: dict[str, Any] = {
        "status": "degraded" if diagnostics else "healthy",
        "config": config_summary,
        "uptime_seconds": uptime_seconds,
        "metrics": {
            "uptime_seconds": uptime_seconds,
            "operations": [m.to_dict() for m in metrics_collector.get_all_metrics()],
        },
    }
    if diagnostics:
        response["diagnostics"] = diagnostics

    logger.info("Health check completed")
    return response
