# -*- coding: utf-8 -*-
"""Location: ./tests/unit/apiresource/services/test_logging_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tests for the logging service and settings.
"""

# Standard
import logging

# Third-Party
import pytest

# First-Party
from apiresource import resource as resource_module
from apiresource.config import Settings
from apiresource.services.logging_service import LoggingService, ROOT_LOGGER_NAME


@pytest.fixture
def clean_logger():
    """Detach handlers added to the package logger during a test."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    logger.handlers = []
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def test_get_logger_namespaced():
    """Loggers live under the package namespace."""
    service = LoggingService()

    assert service.get_logger("routing.cascade").name == "apiresource.routing.cascade"
    assert service.get_logger("apiresource").name == "apiresource"


def test_configure_once(clean_logger):
    """Configuring twice attaches a single handler."""
    service = LoggingService(level="WARNING")
    service.configure()
    service.configure()

    assert len(clean_logger.handlers) == 1
    assert clean_logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info(clean_logger):
    """Unknown level names configure INFO."""
    assert LoggingService(level="chatty").configure().level == logging.INFO


def test_settings_from_environment(monkeypatch):
    """Settings are read from APIRESOURCE_ variables."""
    monkeypatch.setenv("APIRESOURCE_DEFAULT_VERSIONS", '["1.0", "2.0"]')
    monkeypatch.setenv("APIRESOURCE_STRICT", "true")
    monkeypatch.setenv("APIRESOURCE_LOG_LEVEL", "DEBUG")

    settings = Settings(_env_file=None)

    assert settings.default_versions == ["1.0", "2.0"]
    assert settings.strict is True
    assert settings.log_level == "DEBUG"
    assert settings.api_prefix == "/api"


def test_resource_uses_settings(monkeypatch):
    """Resources fall back to settings for options not given."""
    monkeypatch.setattr(resource_module, "settings", Settings(_env_file=None, default_versions=["1.0", "3.0"], default_id_attribute_name="id"))
    created = resource_module.ApiResource(root="entities")

    assert created.versions == ("3.0", "1.0")
    assert created.id_attribute_name == "id"
