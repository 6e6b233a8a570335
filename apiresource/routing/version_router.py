# -*- coding: utf-8 -*-
"""Location: ./apiresource/routing/version_router.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Per-version route table.

A :class:`VersionRouter` owns the routes registered for exactly one declared
version. Routes are kept in registration order and matched in that order;
the first route whose method and path pattern match wins. Routes are
expected to be registered before the resource starts serving requests.

Examples:
    >>> async def handler(request, call_next):
    ...     return None
    >>> router = VersionRouter("1.0")
    >>> _ = router.register("GET", "/", handler)
    >>> _ = router.register("GET", "/{_id}", handler)
    >>> router.dispatch("GET", "/7").path_params
    {'_id': '7'}
    >>> router.dispatch("POST", "/7") is None
    True
"""

# Standard
from dataclasses import dataclass, field
import re
from typing import Any, Awaitable, Callable, Dict, Iterator, List, NamedTuple, Optional, Pattern, Tuple

# Third-Party
from starlette.convertors import Convertor
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import compile_path

# First-Party
from apiresource.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger("routing.version_router")

CallNext = Callable[[Request], Awaitable[Response]]
Handler = Callable[[Request, CallNext], Awaitable[Response]]


@dataclass(frozen=True)
class Route:
    """A registered (method, path pattern, handler chain) entry."""

    method: str
    path: str
    handlers: Tuple[Handler, ...]
    path_regex: Pattern = field(repr=False, compare=False)
    param_convertors: Dict[str, Convertor] = field(repr=False, compare=False)

    def matches(self, method: str, path: str) -> Optional[Dict[str, Any]]:
        """Match a request against this route.

        Args:
            method: Request method, upper case
            path: Path relative to the version mount, already normalized

        Returns:
            Optional[Dict[str, Any]]: Path parameters on match, None otherwise
        """
        if method != self.method and not (method == "HEAD" and self.method == "GET"):
            return None
        match = self.path_regex.match(path)
        if match is None:
            return None
        return {key: self.param_convertors[key].convert(value) for key, value in match.groupdict().items()}


class RouteMatch(NamedTuple):
    """A matched route with its extracted path parameters."""

    route: Route
    path_params: Dict[str, Any]


class VersionRouter:
    """Ordered, append-only route table for a single version."""

    def __init__(self, version: str, case_sensitive: bool = False, strict: bool = False):
        """Initialize an empty router.

        Args:
            version: Declared version identifier this router serves
            case_sensitive: Match paths case sensitively
            strict: Treat a trailing slash as significant
        """
        self.version = version
        self.case_sensitive = case_sensitive
        self.strict = strict
        self._routes: List[Route] = []

    @property
    def routes(self) -> Tuple[Route, ...]:
        """Registered routes in match order."""
        return tuple(self._routes)

    def register(self, method: str, path: str, *handlers: Handler) -> Route:
        """Append a route.

        Args:
            method: HTTP method
            path: Path pattern, ``"/"`` for the collection, ``"/{name}"`` for a parameter
            *handlers: Handler chain, run in order

        Returns:
            Route: The registered route

        Raises:
            TypeError: If no handler is given or a handler is not callable
        """
        if not handlers:
            raise TypeError(f"{method.upper()} {path} requires at least one handler")
        for handler in handlers:
            if not callable(handler):
                raise TypeError(f"{method.upper()} {path} handler {handler!r} is not callable")

        path = path or "/"
        path_regex, _, param_convertors = compile_path(path)
        if not self.case_sensitive:
            path_regex = re.compile(path_regex.pattern, re.IGNORECASE)

        route = Route(method.upper(), path, tuple(handlers), path_regex, param_convertors)
        self._routes.append(route)
        logger.debug(f"Registered {route.method} {route.path} for version {self.version}")
        return route

    def normalize_path(self, path: str) -> str:
        """Normalize a path relative to the version mount.

        Args:
            path: Remaining request path

        Returns:
            str: The path to match against route patterns

        Examples:
            >>> VersionRouter("1.0").normalize_path("")
            '/'
            >>> VersionRouter("1.0").normalize_path("/7/")
            '/7'
            >>> VersionRouter("1.0", strict=True).normalize_path("/7/")
            '/7/'
        """
        if not path:
            return "/"
        if not self.strict and path != "/" and path.endswith("/"):
            return path[:-1]
        return path

    def iter_matches(self, method: str, path: str) -> Iterator[RouteMatch]:
        """Yield every route matching the request, in registration order.

        Args:
            method: Request method
            path: Path relative to the version mount

        Yields:
            RouteMatch: Matching routes
        """
        method = method.upper()
        path = self.normalize_path(path)
        for route in self._routes:
            params = route.matches(method, path)
            if params is not None:
                yield RouteMatch(route, params)

    def dispatch(self, method: str, path: str) -> Optional[RouteMatch]:
        """Return the first route matching the request.

        Args:
            method: Request method
            path: Path relative to the version mount

        Returns:
            Optional[RouteMatch]: The first match, or None when nothing matches
        """
        return next(self.iter_matches(method, path), None)

    def __repr__(self) -> str:
        return f"VersionRouter(version={self.version!r}, routes={len(self._routes)})"
