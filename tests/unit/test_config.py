"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from uripath_mcp.config import Config, get_config, load_config, reset_config


class TestLoadConfig:
    """Tests for load_config() function."""

    def test_load_config_with_defaults(self):
        """Test load_config() returns defaults when no env vars set."""
        config = load_config()
        assert config.log_level == "INFO"
        assert config.log_mode == "stderr"
        assert config.log_file is None
        assert config.enable_health_check is True
        assert config.composite_schemes is None
        assert config.max_input_length == 8192

    def test_load_config_with_custom_log_level(self, set_env_vars):
        """Test load_config() with custom log level."""
        set_env_vars(URIPATH_MCP_LOG_LEVEL="debug")
        config = load_config()
        assert config.log_level == "DEBUG"

    def test_load_config_with_custom_log_mode(self, set_env_vars):
        """Test load_config() with custom log mode."""
        set_env_vars(URIPATH_MCP_LOG_MODE="BOTH")
        config = load_config()
        assert config.log_mode == "both"

    def test_load_config_with_log_file(self, set_env_vars, tmp_path: Path):
        """Test load_config() with log file path."""
        log_file = tmp_path / "test.log"
        set_env_vars(URIPATH_MCP_LOG_FILE=str(log_file))
        config = load_config()
        assert config.log_file == log_file.resolve()

    def test_load_config_with_health_check_disabled(self, set_env_vars):
        """Test load_config() with health check disabled."""
        set_env_vars(URIPATH_MCP_ENABLE_HEALTH_CHECK="false")
        config = load_config()
        assert config.enable_health_check is False

    def test_load_config_with_composite_schemes(self, set_env_vars):
        """Test load_config() parses the composite scheme allow-list."""
        set_env_vars(URIPATH_MCP_COMPOSITE_SCHEMES="jar, ZIP,,war ")
        config = load_config()
        assert config.composite_schemes == frozenset({"jar", "zip", "war"})

    def test_load_config_with_max_input_length(self, set_env_vars):
        """Test load_config() with custom max input length."""
        set_env_vars(URIPATH_MCP_MAX_INPUT_LENGTH="100")
        config = load_config()
        assert config.max_input_length == 100


class TestLoadConfigValidation:
    """Tests for invalid configuration values."""

    def test_invalid_log_level_raises(self, set_env_vars):
        """Test invalid log level raises ValueError."""
        set_env_vars(URIPATH_MCP_LOG_LEVEL="LOUD")
        with pytest.raises(ValueError, match="URIPATH_MCP_LOG_LEVEL"):
            load_config()

    def test_invalid_log_mode_raises(self, set_env_vars):
        """Test invalid log mode raises ValueError."""
        set_env_vars(URIPATH_MCP_LOG_MODE="syslog")
        with pytest.raises(ValueError, match="URIPATH_MCP_LOG_MODE"):
            load_config()

    def test_non_integer_max_input_length_raises(self, set_env_vars):
        """Test non-numeric max input length raises ValueError."""
        set_env_vars(URIPATH_MCP_MAX_INPUT_LENGTH="lots")
        with pytest.raises(ValueError, match="must be an integer"):
            load_config()

    def test_non_positive_max_input_length_raises(self, set_env_vars):
        """Test zero max input length raises ValueError."""
        set_env_vars(URIPATH_MCP_MAX_INPUT_LENGTH="0")
        with pytest.raises(ValueError, match="must be positive"):
            load_config()


class TestGetConfig:
    """Tests for the config singleton."""

    def test_get_config_caches(self):
        """Test get_config() returns the same instance."""
        assert get_config() is get_config()

    def test_reset_config_reloads(self, set_env_vars):
        """Test reset_config() forces a reload."""
        first = get_config()
        set_env_vars(URIPATH_MCP_LOG_LEVEL="ERROR")
        reset_config()
        second = get_config()

        assert first is not second
        assert isinstance(second, Config)
        assert second.log_level == "ERROR"
