# -*- coding: utf-8 -*-
"""Location: ./apiresource/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

apiresource - versioned REST resources for ASGI applications.

A resource declares its API versions once; handlers registered for a version
keep serving newer versions until those register their own.
"""

__version__ = "0.1.0"

# First-Party
from apiresource.exceptions import AmbiguousVersionError, InvalidVersionError, MissingRootError, ResourceError, UnknownVersionError  # noqa: E402
from apiresource.resource import ApiResource, RouteInfo  # noqa: E402
from apiresource.rules import OperationKind  # noqa: E402

__all__ = [
    "AmbiguousVersionError",
    "ApiResource",
    "InvalidVersionError",
    "MissingRootError",
    "OperationKind",
    "ResourceError",
    "RouteInfo",
    "UnknownVersionError",
]
