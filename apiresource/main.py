# -*- coding: utf-8 -*-
"""Location: ./apiresource/main.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Application wiring for versioned resources.

Core Functions:
- create_app(resources, prefix) -> FastAPI: Builds an application serving the resources
- setup_resource_routes(app, resources, prefix) -> None: Mounts resources on an existing application

Every resource is mounted under ``prefix`` so that, for ``prefix="/api"``, a
resource with root ``/entities`` answers ``/api/{version}/entities``. An
endpoint listing at ``{prefix}/endpoints`` describes every mounted resource.

Examples:
    >>> from starlette.routing import Mount
    >>> from apiresource.resource import ApiResource
    >>> app = create_app([ApiResource(root="entities")], prefix="/api/")
    >>> [route.path for route in app.routes if isinstance(route, Mount)]
    ['/api']
"""

# Standard
from functools import partial
from typing import Any, Dict, Iterable, List, Optional

# Third-Party
from fastapi import APIRouter, FastAPI
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

# First-Party
from apiresource import __version__
from apiresource.config import settings
from apiresource.resource import ApiResource
from apiresource.routing.cascade import not_found
from apiresource.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger("main")


def setup_resource_routes(app: FastAPI, resources: Iterable[ApiResource], prefix: str = "") -> None:
    """Mount resources and the endpoint listing on an application.

    The endpoint listing is registered before the mount so it is not
    shadowed by it.

    Args:
        app: FastAPI application instance to configure
        resources: Resources to mount, all under the same prefix
        prefix: Mount path, ``""`` to mount at the application root
    """
    resources = list(resources)
    router = APIRouter(tags=["resources"])

    @router.get(f"{prefix}/endpoints")
    async def list_endpoints() -> List[Dict[str, Any]]:
        """Describe every mounted resource and its routes."""
        listing = []
        for resource in resources:
            description = resource.describe()
            for route in description["routes"]:
                route["path"] = f"{prefix}{route['path']}"
            listing.append(description)
        return listing

    app.include_router(router)

    for resource in resources:
        for route in resource.routes():
            logger.info(f"{route.method} {prefix}{route.path}")

    app.mount(prefix or "/", ResourceGroup(resources), name="resources")


class ResourceGroup:
    """ASGI app serving several resources sharing a mount point, in order.

    A request that passes through every matching route of one resource
    continues with the next resource, and after the last one ends in
    not-found.
    """

    def __init__(self, resources: List[ApiResource]):
        """Initialize the group.

        Args:
            resources: Resources to serve
        """
        self.resources = resources

    async def respond(self, request: Request, index: int = 0) -> Response:
        """Serve a request from the resource at ``index`` onwards.

        Args:
            request: The incoming request
            index: Position of the first resource to try

        Returns:
            Response: The response of the answering handler
        """
        if index == len(self.resources):
            return await not_found(request)
        return await self.resources[index].composer.respond(request, partial(self.respond, index=index + 1))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Forward the connection through the resources.

        Args:
            scope: ASGI connection scope
            receive: ASGI receive channel
            send: ASGI send channel
        """
        if scope["type"] == "http":
            response = await self.respond(Request(scope, receive))
            await response(scope, receive, send)
        elif self.resources:
            await self.resources[0](scope, receive, send)


def create_app(resources: Iterable[ApiResource], prefix: Optional[str] = None, title: str = "apiresource") -> FastAPI:
    """Create a FastAPI application serving versioned resources.

    Args:
        resources: Resources to serve
        prefix: Mount path, defaults to ``settings.api_prefix``
        title: Application title

    Returns:
        FastAPI: The configured application
    """
    logging_service.configure()
    prefix = (settings.api_prefix if prefix is None else prefix).rstrip("/")

    app = FastAPI(title=title, version=__version__)
    setup_resource_routes(app, resources, prefix)
    logger.info(f"Application {title} ready, resources mounted under {prefix or '/'}")
    return app
