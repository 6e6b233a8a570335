# -*- coding: utf-8 -*-
"""Location: ./apiresource/versioning.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Version ordering for versioned resources.

Version identifiers are kept verbatim (they appear as-is in URLs) and are
compared through their coerced semantic version: the first
``major[.minor[.patch]]`` run of digits found in the string, with missing
parts filled with zeros.

Examples:
    >>> str(coerce_version("1.1"))
    '1.1.0'
    >>> str(coerce_version("v2"))
    '2.0.0'
    >>> sort_versions(["1.0", "2.0", "1.1"])
    ('2.0', '1.1', '1.0')
    >>> fallback_chain("1.1", ("2.0", "1.1", "1.0"))
    ('1.1', '1.0')
"""

# Standard
import re
from typing import Iterable, Tuple

# Third-Party
import semver

# First-Party
from apiresource.exceptions import AmbiguousVersionError, InvalidVersionError

COERCE_PATTERN = re.compile(r"(?:^|[^\d])(\d{1,16})(?:\.(\d{1,16}))?(?:\.(\d{1,16}))?(?:$|[^\d])")


def coerce_version(version: str) -> semver.Version:
    """Coerce a version identifier into a semantic version.

    Args:
        version: Version identifier such as ``"1.0"``, ``"v2"`` or ``"1.2.3"``

    Returns:
        semver.Version: The coerced version

    Raises:
        InvalidVersionError: If the identifier holds no version number

    Examples:
        >>> str(coerce_version("1.2.3.4"))
        '1.2.3'
        >>> coerce_version("latest")
        Traceback (most recent call last):
        ...
        apiresource.exceptions.InvalidVersionError: invalid version latest
    """
    if not isinstance(version, str):
        raise InvalidVersionError(str(version))
    match = COERCE_PATTERN.search(version)
    if match is None:
        raise InvalidVersionError(version)
    major, minor, patch = (int(part or 0) for part in match.groups())
    return semver.Version(major, minor, patch)


def sort_versions(versions: Iterable[str]) -> Tuple[str, ...]:
    """Sort version identifiers newest first.

    Args:
        versions: Version identifiers in any order

    Returns:
        Tuple[str, ...]: The identifiers, strictly descending

    Raises:
        InvalidVersionError: If an identifier can not be coerced
        AmbiguousVersionError: If two identifiers coerce to the same version

    Examples:
        >>> sort_versions(["1.0", "1.0.0"])
        Traceback (most recent call last):
        ...
        apiresource.exceptions.AmbiguousVersionError: ambiguous versions 1.0, 1.0.0
    """
    keyed = sorted(((coerce_version(v), v) for v in versions), key=lambda item: item[0], reverse=True)
    for (newer, newer_name), (older, older_name) in zip(keyed, keyed[1:]):
        if newer == older:
            first, second = sorted((newer_name, older_name))
            raise AmbiguousVersionError(first, second)
    return tuple(name for _, name in keyed)


def fallback_chain(version: str, versions: Iterable[str]) -> Tuple[str, ...]:
    """Return the declared versions a request for ``version`` may be served by.

    The chain starts with ``version`` itself and walks down to the oldest
    declared version; newer versions are never included.

    Args:
        version: The requested version
        versions: Declared versions, newest first

    Returns:
        Tuple[str, ...]: Versions lower than or equal to ``version``, newest first

    Examples:
        >>> fallback_chain("1.0", ("2.0", "1.1", "1.0"))
        ('1.0',)
        >>> fallback_chain("2.0", ("2.0", "1.1", "1.0"))
        ('2.0', '1.1', '1.0')
    """
    target = coerce_version(version)
    return tuple(v for v in versions if coerce_version(v) <= target)
