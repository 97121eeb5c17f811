"""Tests for common utilities."""

import logging

import pytest
import structlog

from tpuf_store.common.config import TurbopufferConfig, public_settings
from tpuf_store.common.logging import (
    configure_logging,
    configure_logging_from_config,
    get_logger,
)


@pytest.fixture
def reset_structlog():
    """Restore structlog defaults and root logging so other tests are unaffected."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_config_defaults(monkeypatch):
    """Test configuration defaults."""
    monkeypatch.delenv("TURBOPUFFER_API_KEY", raising=False)
    config = TurbopufferConfig(_env_file=None)
    assert config.turbopuffer_api_key is None
    assert config.api_key_value() is None
    assert config.turbopuffer_api_endpoint == "https://api.turbopuffer.com/v1"
    assert config.tpuf_log_level == "INFO"
    assert config.tpuf_log_format == "json"


def test_config_from_environment(monkeypatch):
    """Test environment variables are picked up case-insensitively."""
    monkeypatch.setenv("TURBOPUFFER_API_KEY", "env-key")
    monkeypatch.setenv("TURBOPUFFER_API_ENDPOINT", "https://eu.example.test/v1")
    config = TurbopufferConfig(_env_file=None)
    assert config.api_key_value() == "env-key"
    assert config.turbopuffer_api_endpoint == "https://eu.example.test/v1"


def test_config_hides_secret(monkeypatch):
    """Test the API key stays out of reprs and public settings."""
    monkeypatch.delenv("TURBOPUFFER_API_KEY", raising=False)
    config = TurbopufferConfig(_env_file=None, turbopuffer_api_key="top-secret")
    assert "top-secret" not in repr(config)

    public = public_settings(config)
    assert "turbopuffer_api_key" not in public
    assert public["turbopuffer_api_endpoint"] == "https://api.turbopuffer.com/v1"


def test_blank_api_key_is_unset():
    """Test a blank key resolves to ``None``."""
    config = TurbopufferConfig(_env_file=None, turbopuffer_api_key="")
    assert config.api_key_value() is None


@pytest.mark.parametrize("log_format", ["json", "console"])
def test_logging_configuration(log_format, reset_structlog):
    """Test logging configuration."""
    # This should not raise an exception
    configure_logging("test-service", "INFO", log_format)
    get_logger("test").info("configured", log_format=log_format)


def test_logging_from_config(monkeypatch, reset_structlog):
    """Test logging level and format are taken from settings."""
    monkeypatch.setenv("TPUF_LOG_LEVEL", "debug")
    monkeypatch.setenv("TPUF_LOG_FORMAT", "console")
    config = TurbopufferConfig(_env_file=None)
    assert config.tpuf_log_format == "console"

    configure_logging_from_config(config, service_name="test-service")
    assert structlog.contextvars.get_contextvars()["service"] == "test-service"
