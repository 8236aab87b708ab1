"""Fixtures for infrastructure.logging tests."""

from unittest.mock import MagicMock, Mock

import pytest
import structlog

from infrastructure.configuration import Settings
from infrastructure.logging import setup as logging_setup


@pytest.fixture
def mock_settings():
    """Development-mode Settings stand-in."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.is_production = False
    return settings


@pytest.fixture
def outside_tests(monkeypatch):
    """Run configure_logging as it would outside pytest, capturing its calls.

    structlog.configure and logging.basicConfig are replaced so global
    logging state is left untouched.
    """
    structlog_configure = MagicMock()
    basic_config = MagicMock()
    monkeypatch.setattr(logging_setup, "_is_test_environment", lambda: False)
    monkeypatch.setattr(structlog, "configure", structlog_configure)
    monkeypatch.setattr(logging_setup.logging, "basicConfig", basic_config)
    return structlog_configure, basic_config
