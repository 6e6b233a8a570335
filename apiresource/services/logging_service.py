# -*- coding: utf-8 -*-
"""Location: ./apiresource/services/logging_service.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Logging service for apiresource.

All modules share the ``apiresource`` logger hierarchy. The service attaches
a single console handler the first time :meth:`LoggingService.configure` is
called; loggers can be requested before that and pick up the configuration
once it happens.

Examples:
    >>> service = LoggingService()
    >>> service.get_logger("resource").name
    'apiresource.resource'
    >>> service.get_logger("apiresource.rules").name
    'apiresource.rules'
"""

# Standard
import logging
from typing import Optional

# First-Party
from apiresource.config import settings

ROOT_LOGGER_NAME = "apiresource"


class LoggingService:
    """Hands out loggers below the ``apiresource`` namespace."""

    def __init__(self, level: Optional[str] = None, fmt: Optional[str] = None):
        """Initialize the service.

        Args:
            level: Log level name, defaults to ``settings.log_level``
            fmt: Log format, defaults to ``settings.log_format``
        """
        self.level = level or settings.log_level
        self.fmt = fmt or settings.log_format

    def configure(self) -> logging.Logger:
        """Attach a console handler to the package logger if it has none.

        Returns:
            logging.Logger: The configured ``apiresource`` logger

        Examples:
            >>> service = LoggingService(level="debug")
            >>> service.configure().level == logging.DEBUG
            True
        """
        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(getattr(logging, self.level.upper(), logging.INFO))
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(self.fmt))
            root.addHandler(handler)
        return root

    def get_logger(self, name: str) -> logging.Logger:
        """Return a logger in the package namespace.

        Args:
            name: Logger name, with or without the ``apiresource.`` prefix

        Returns:
            logging.Logger: The logger
        """
        if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        return logging.getLogger(name)
