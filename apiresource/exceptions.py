# -*- coding: utf-8 -*-
"""Location: ./apiresource/exceptions.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Exceptions raised while constructing a resource or registering its routes.

These are programmer errors: they are raised synchronously from the
constructor or the registration call that caused them and are never
retried. A request that matches no route is not an error; it ends up in
the host router's not-found handling.
"""

# Standard
from typing import Iterable


class ResourceError(ValueError):
    """Base class for resource configuration errors."""


class MissingRootError(ResourceError):
    """Raised when a resource is constructed without a root path.

    Examples:
        >>> str(MissingRootError())
        'root is required'
    """

    def __init__(self):
        super().__init__("root is required")


class InvalidVersionError(ResourceError):
    """Raised when a declared version can not be coerced to a semantic version.

    Args:
        version: The offending version identifier

    Examples:
        >>> str(InvalidVersionError("latest"))
        'invalid version latest'
    """

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"invalid version {version}")


class AmbiguousVersionError(InvalidVersionError):
    """Raised when two declared versions coerce to the same semantic version.

    Examples:
        >>> err = AmbiguousVersionError("1.0", "1.0.0")
        >>> str(err)
        'ambiguous versions 1.0, 1.0.0'
        >>> err.versions
        ('1.0', '1.0.0')
    """

    def __init__(self, first: str, second: str):
        self.versions = (first, second)
        ResourceError.__init__(self, f"ambiguous versions {first}, {second}")
        self.version = second


class UnknownVersionError(ResourceError):
    """Raised when a registration call names a version the resource does not declare.

    Args:
        version: The requested version
        declared: Declared versions, newest first

    Examples:
        >>> str(UnknownVersionError("1.1", ["2.0", "1.0"]))
        'unknown version 1.1, expected one of 2.0, 1.0'
    """

    def __init__(self, version: str, declared: Iterable[str]):
        self.version = version
        self.declared = tuple(declared)
        super().__init__(f"unknown version {version}, expected one of {', '.join(self.declared)}")
