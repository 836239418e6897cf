"""Pytest configuration and shared fixtures."""

import logging
import os
from typing import Iterator

import pytest

from uripath_mcp.config import reset_config
from uripath_mcp.metrics import reset_metrics_collector


@pytest.fixture(autouse=True)
def reset_config_fixture() -> Iterator[None]:
    """Reset config singleton between tests for isolation."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def reset_metrics_fixture() -> Iterator[None]:
    """Reset metrics singleton between tests for isolation."""
    reset_metrics_collector()
    yield
    reset_metrics_collector()


@pytest.fixture
def set_env_vars():
    """Fixture to temporarily set environment variables."""

    def _set_env_vars(**kwargs: str) -> None:
        for key, value in kwargs.items():
            os.environ[key] = value

    yield _set_env_vars

    # Cleanup: remove all URIPATH_MCP_ env vars
    keys_to_remove = [key for key in os.environ if key.startswith("URIPATH_MCP_")]
    for key in keys_to_remove:
        del os.environ[key]


@pytest.fixture
def clean_logger_state() -> Iterator[None]:
    """Restore root, uripath_mcp and mcp logger state changed by setup_logging()."""
    root = logging.getLogger()
    watched = [logging.getLogger(name) for name in ("uripath_mcp", "mcp")]

    original_root_handlers = root.handlers[:]
    original_root_level = root.level
    original_levels = [logger.level for logger in watched]

    yield

    for handler in root.handlers:
        if handler not in original_root_handlers:
            handler.close()
    root.handlers = original_root_handlers
    root.setLevel(original_root_level)
    for logger, level in zip(watched, original_levels):
        logger.setLevel(level)
