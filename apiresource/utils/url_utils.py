# -*- coding: utf-8 -*-
"""Location: ./apiresource/utils/url_utils.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Path helpers shared by the routers.
"""

# Standard
from typing import Any, MutableMapping


def normalize_root(root: str) -> str:
    """
    Ensure a mount path starts with a slash.

    Args:
        root (str): Mount path such as ``"entities"`` or ``"/entities"``.

    Returns:
        str: The path with a leading slash.

    Examples:
        >>> normalize_root("entities")
        '/entities'
        >>> normalize_root("/entities")
        '/entities'
    """
    return root if root.startswith("/") else f"/{root}"


def get_route_path(scope: MutableMapping[str, Any]) -> str:
    """
    Return the request path relative to the point the current app is mounted at.

    Starlette mounts record the consumed prefix in ``root_path`` and leave
    ``path`` untouched, older releases rewrite ``path`` instead. Both shapes
    are handled.

    Args:
        scope (MutableMapping[str, Any]): The ASGI connection scope.

    Returns:
        str: The remaining path, ``""`` when the whole path was consumed.

    Examples:
        >>> get_route_path({"path": "/api/1.0/entities", "root_path": "/api"})
        '/1.0/entities'
        >>> get_route_path({"path": "/1.0/entities", "root_path": "/api"})
        '/1.0/entities'
        >>> get_route_path({"path": "/api", "root_path": "/api"})
        ''
    """
    path = scope["path"]
    root_path = scope.get("root_path", "")
    if not root_path or not path.startswith(root_path):
        return path
    if path == root_path:
        return ""
    if path[len(root_path)] == "/":
        return path[len(root_path):]
    return path


def strip_prefix(path: str, prefix: str, case_sensitive: bool = False):
    """
    Remove a mount prefix from a path.

    Args:
        path (str): Request path.
        prefix (str): Mount prefix, without trailing slash.
        case_sensitive (bool): Compare case sensitively.

    Returns:
        Optional[str]: The remaining path (``"/"`` for an exact match), or None if
        ``path`` is not below ``prefix``.

    Examples:
        >>> strip_prefix("/1.0/entities/7", "/1.0/entities")
        '/7'
        >>> strip_prefix("/1.0/Entities", "/1.0/entities")
        '/'
        >>> strip_prefix("/1.0/entitiesX", "/1.0/entities") is None
        True
        >>> strip_prefix("/1.0/Entities", "/1.0/entities", case_sensitive=True) is None
        True
    """
    head = path[: len(prefix)]
    if (head if case_sensitive else head.lower()) != (prefix if case_sensitive else prefix.lower()):
        return None
    rest = path[len(prefix):]
    if not rest:
        return "/"
    if rest[0] != "/":
        return None
    return rest
