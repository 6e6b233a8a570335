# -*- coding: utf-8 -*-
"""Location: ./apiresource/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Runtime settings for apiresource.

Values are read from ``APIRESOURCE_*`` environment variables or a ``.env``
file. They only provide defaults: every option passed explicitly to
:class:`apiresource.resource.ApiResource` wins over the matching setting.

Examples:
    >>> from apiresource.config import Settings
    >>> s = Settings(_env_file=None)
    >>> s.default_versions
    ['1.0']
    >>> s.default_id_attribute_name
    '_id'
"""

# Standard
from typing import List

# Third-Party
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """apiresource settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_prefix="APIRESOURCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Level of the apiresource logger hierarchy.")
    log_format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        description="Format string for the console handler.",
    )

    # Resource defaults
    default_versions: List[str] = Field(default_factory=lambda: ["1.0"], description="Versions declared when none are given.")
    default_id_attribute_name: str = Field(default="_id", description="Identifier path parameter name.")
    case_sensitive: bool = Field(default=False, description="Match paths case sensitively.")
    strict: bool = Field(default=False, description="Treat a trailing slash as significant.")

    # Application wiring
    api_prefix: str = Field(default="/api", description="Prefix resources are mounted under by create_app.")


settings = Settings()
