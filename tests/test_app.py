"""Tests for application startup and logging configuration."""

import logging
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from lunch_scheduler.app import app
from lunch_scheduler.logging_config import LOGGING_CONFIG, configure_logging


def _mock_settings(log_level: str = "INFO") -> MagicMock:
    settings = MagicMock()
    settings.log_level = log_level
    return settings


@patch("lunch_scheduler.app.configure_logging")
@patch("lunch_scheduler.app.get_settings")
def test_lifespan_stores_settings(mock_get_settings: MagicMock, mock_configure: MagicMock):
    """Startup caches settings on app.state and configures logging at the configured level."""
    settings = _mock_settings("DEBUG")
    mock_get_settings.return_value = settings

    with TestClient(app):
        assert app.state.settings is settings

    mock_configure.assert_called_once_with("DEBUG")


def test_configure_logging_sets_root_level():
    """configure_logging applies the requested level to the root logger."""
    try:
        configure_logging("warning")
        assert logging.getLogger().level == logging.WARNING
    finally:
        configure_logging("INFO")


def test_configure_logging_does_not_mutate_base_config():
    """The module-level config dict keeps its INFO default."""
    configure_logging("DEBUG")
    configure_logging("INFO")
    assert LOGGING_CONFIG["root"]["level"] == "INFO"


def test_json_formatter_uses_gcp_field_names():
    """Log records are renamed to severity/timestamp/logger for Cloud Logging."""
    formatter = LOGGING_CONFIG["formatters"]["json"]
    assert formatter["rename_fields"]["levelname"] == "severity"
    assert formatter["static_fields"] == {"service": "lunch-scheduler"}
