# -*- coding: utf-8 -*-
"""Location: ./apiresource/routing/cascade.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Cross-version fallback.

For every declared version ``v`` the composer mounts, under ``/{v}{root}``,
the routers of every declared version lower than or equal to ``v``, newest
first. For versions ``1.0``, ``1.1`` and ``2.0``::

    /1.0/entities -> 1.0
    /1.1/entities -> 1.1, 1.0
    /2.0/entities -> 2.0, 1.1, 1.0

A version without a matching route therefore falls through to the nearest
lower version that has one, never to a newer one. The mount table is built
once; routes added to the routers afterwards are picked up because the
routers are consulted at request time.
"""

# Standard
from functools import partial
from typing import Iterator, Mapping, NamedTuple, Optional, Tuple

# Third-Party
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import Receive, Scope, Send

# First-Party
from apiresource.routing.version_router import CallNext, RouteMatch, VersionRouter
from apiresource.services.logging_service import LoggingService
from apiresource.utils.url_utils import get_route_path, strip_prefix
from apiresource.versioning import fallback_chain

logging_service = LoggingService()
logger = logging_service.get_logger("routing.cascade")


class Mount(NamedTuple):
    """A version prefix and the versions whose routers serve it, newest first."""

    prefix: str
    version: str
    chain: Tuple[str, ...]


class CascadeMatch(NamedTuple):
    """A route matched through a version mount."""

    mount: Mount
    router: VersionRouter
    match: RouteMatch


class CascadeComposer:
    """Builds and dispatches the version fallback mounts of a resource."""

    def __init__(self, root: str, versions: Tuple[str, ...], routers: Mapping[str, VersionRouter], case_sensitive: bool = False):
        """Build the mount table.

        Args:
            root: Normalized resource root, e.g. ``/entities``
            versions: Declared versions, newest first
            routers: Router of every declared version
            case_sensitive: Match the mount prefix case sensitively
        """
        self.root = root
        self.case_sensitive = case_sensitive
        self._routers = routers
        self._mounts = tuple(Mount(f"/{version}{root}", version, fallback_chain(version, versions)) for version in versions)
        for mount in self._mounts:
            logger.debug(f"Mounted {mount.prefix} -> {', '.join(mount.chain)}")

    @property
    def mounts(self) -> Tuple[Mount, ...]:
        """The static mount table, newest version first."""
        return self._mounts

    def iter_matches(self, method: str, path: str) -> Iterator[CascadeMatch]:
        """Yield every route that may answer a request, in dispatch order.

        Args:
            method: Request method
            path: Path relative to the resource mount point, e.g. ``/1.1/entities/7``

        Yields:
            CascadeMatch: Matches from the newest applicable version down to the oldest
        """
        for mount in self._mounts:
            rest = strip_prefix(path, mount.prefix, self.case_sensitive)
            if rest is None:
                continue
            for version in mount.chain:
                router = self._routers[version]
                for match in router.iter_matches(method, rest):
                    yield CascadeMatch(mount, router, match)

    def dispatch(self, method: str, path: str):
        """Return the route a request resolves to.

        Args:
            method: Request method
            path: Path relative to the resource mount point

        Returns:
            Optional[CascadeMatch]: The first match, or None when no version has a route

        Examples:
            >>> async def handler(request, call_next):
            ...     return None
            >>> routers = {v: VersionRouter(v) for v in ("1.1", "1.0")}
            >>> _ = routers["1.0"].register("GET", "/", handler)
            >>> composer = CascadeComposer("/entities", ("1.1", "1.0"), routers)
            >>> composer.dispatch("GET", "/1.1/entities").router.version
            '1.0'
            >>> composer.dispatch("GET", "/2.0/entities") is None
            True
        """
        return next(self.iter_matches(method, path), None)

    async def respond(self, request: Request, fallback: Optional[CallNext] = None) -> Response:
        """Run the matching routes for a request and return the response.

        Each route's handlers run in order; a handler continues the chain
        with ``await call_next(request)``. Continuing past the last handler
        of a route moves on to the next matching route, and past the last
        matching route to ``fallback``.

        Args:
            request: The incoming request
            fallback: Called when every matching route passed the request on, defaults to :func:`not_found`

        Returns:
            Response: The response of the answering handler

        Raises:
            RuntimeError: If a handler returns no response
        """
        fallback = fallback or not_found
        base_params = dict(request.scope.get("path_params", {}))
        matches = self.iter_matches(request.method, get_route_path(request.scope))

        async def next_route(request: Request) -> Response:
            found = next(matches, None)
            if found is None:
                request.scope["path_params"] = base_params
                return await fallback(request)
            request.scope["path_params"] = {**base_params, **found.match.path_params}
            request.scope["api_version"] = found.mount.version
            request.scope["resource_version"] = found.router.version
            return await run_handler(found.match.route.handlers, 0, request)

        async def run_handler(handlers, index: int, request: Request) -> Response:
            if index == len(handlers):
                return await next_route(request)
            response = await handlers[index](request, partial(run_handler, handlers, index + 1))
            if response is None:
                raise RuntimeError(f"handler {handlers[index]!r} returned no response")
            return response

        return await next_route(request)

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Serve an HTTP request through the fallback mounts.

        Args:
            scope: ASGI scope of an ``http`` connection
            receive: ASGI receive channel
            send: ASGI send channel
        """
        response = await self.respond(Request(scope, receive))
        await response(scope, receive, send)


async def not_found(request: Request) -> Response:
    """Hand an unmatched request to the host's not-found handling.

    Inside an application the 404 is raised so the application's exception
    handlers render it; a bare resource answers with plain text.

    Args:
        request: The unmatched request

    Returns:
        Response: A plain 404 response when not running inside an application

    Raises:
        HTTPException: 404 when running inside an application
    """
    logger.debug(f"No route for {request.method} {request.url.path}")
    if "app" in request.scope:
        raise HTTPException(status_code=404)
    return PlainTextResponse("Not Found", status_code=404)
