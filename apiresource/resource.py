# -*- coding: utf-8 -*-
"""Location: ./apiresource/resource.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Versioned API resource.

An :class:`ApiResource` exposes one logical resource (``/entities``) under
several API versions at once. A handler registered for a version keeps
serving every newer version until one of them registers its own handler
for the same method and path.

Routes:
- ``create``  POST   ``/{version}{root}``
- ``get``     GET    ``/{version}{root}``
- ``get_one`` GET    ``/{version}{root}/{id}``
- ``patch``   PATCH  ``/{version}{root}/{id}``
- ``remove``  DELETE ``/{version}{root}/{id}``
- ``method``  PUT    ``/{version}{root}/{name}``

The resource is an ASGI application, so it mounts like any other::

    resource = ApiResource(root="entities", versions=["1.0", "2.0"])
    resource.get("1.0", list_entities)
    app.mount("/api", resource)

Examples:
    >>> resource = ApiResource(root="entities", versions=["1.0", "1.1"])
    >>> resource.root
    '/entities'
    >>> resource.versions
    ('1.1', '1.0')
    >>> resource.check_version("2.0")
    Traceback (most recent call last):
    ...
    apiresource.exceptions.UnknownVersionError: unknown version 2.0, expected one of 1.1, 1.0
"""

# Standard
import copy
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

# Third-Party
from starlette.types import Receive, Scope, Send

# First-Party
from apiresource.config import settings
from apiresource.exceptions import MissingRootError, UnknownVersionError
from apiresource.routing.cascade import CascadeComposer
from apiresource.routing.version_router import Handler, Route, VersionRouter
from apiresource.rules import derive_rules, operation_kind, OPERATIONS, OperationKind, Rule, RuleSet
from apiresource.services.logging_service import LoggingService
from apiresource.utils.url_utils import normalize_root
from apiresource.validation import validation_handler
from apiresource.versioning import sort_versions

logging_service = LoggingService()
logger = logging_service.get_logger("resource")


class RouteInfo(NamedTuple):
    """A declared endpoint as listed by :meth:`ApiResource.routes`."""

    method: str
    path: str
    version: str


class ApiResource:
    """A resource served under several API versions with cascading fallback."""

    def __init__(
        self,
        root: Optional[str] = None,
        versions: Optional[Sequence[str]] = None,
        validate_rules: Optional[RuleSet] = None,
        id_attribute_name: Optional[str] = None,
        id_attribute_schema: Optional[Rule] = None,
        case_sensitive: Optional[bool] = None,
        strict: Optional[bool] = None,
    ):
        """Build the resource and its version mounts.

        Args:
            root: Mount path segment, e.g. ``"entities"``; a leading slash is added when missing
            versions: Declared versions in any order, defaults to ``settings.default_versions``
            validate_rules: Field rules shared by all operations
            id_attribute_name: Identifier path parameter name, defaults to ``settings.default_id_attribute_name``
            id_attribute_schema: Identifier rule, defaults to ``{"type": "integer"}``
            case_sensitive: Match paths case sensitively, defaults to ``settings.case_sensitive``
            strict: Treat a trailing slash as significant, defaults to ``settings.strict``

        Raises:
            MissingRootError: If ``root`` is empty
            InvalidVersionError: If a version can not be coerced
            AmbiguousVersionError: If two versions coerce to the same semantic version
        """
        if not root:
            raise MissingRootError()

        self.case_sensitive = settings.case_sensitive if case_sensitive is None else case_sensitive
        self.strict = settings.strict if strict is None else strict
        self._root = normalize_root(root)
        self._versions = sort_versions(settings.default_versions if versions is None else versions)
        self._validate_rules: RuleSet = dict(validate_rules or {})
        self._id_attribute_name = id_attribute_name or settings.default_id_attribute_name
        self._id_attribute_schema: Rule = dict(id_attribute_schema or {"type": "integer"})

        self._routers: Dict[str, VersionRouter] = {version: VersionRouter(version, case_sensitive=self.case_sensitive, strict=self.strict) for version in self._versions}
        self._composer = CascadeComposer(self._root, self._versions, self._routers, case_sensitive=self.case_sensitive)
        logger.debug(f"Created resource {self._root} with versions {', '.join(self._versions)}")

    @property
    def root(self) -> str:
        """Normalized mount path of the resource."""
        return self._root

    @property
    def versions(self) -> Tuple[str, ...]:
        """Declared versions, newest first."""
        return self._versions

    @property
    def routers(self) -> Mapping[str, VersionRouter]:
        """Read-only mapping of version to its router."""
        return MappingProxyType(self._routers)

    @property
    def composer(self) -> CascadeComposer:
        """The version fallback mounts."""
        return self._composer

    @property
    def validate_rules(self) -> RuleSet:
        """Declared field rules."""
        return self._validate_rules

    @property
    def id_attribute_name(self) -> str:
        """Identifier path parameter name."""
        return self._id_attribute_name

    @property
    def id_attribute_schema(self) -> Rule:
        """Identifier rule."""
        return self._id_attribute_schema

    def check_version(self, version: str) -> None:
        """Ensure ``version`` is declared.

        Args:
            version: Version identifier

        Raises:
            UnknownVersionError: If the version is not declared
        """
        if version not in self._routers:
            raise UnknownVersionError(version, self._versions)

    def _register(self, kind: OperationKind, version: str, path: str, handlers: Sequence[Handler]) -> Route:
        self.check_version(version)
        route = self._routers[version].register(OPERATIONS[kind].http_method, path, *handlers)
        logger.debug(f"{kind.value}: {route.method} /{version}{self._root}{'' if route.path == '/' else route.path}")
        return route

    def _item_path(self) -> str:
        return f"/{{{self._id_attribute_name}}}"

    def create(self, version: str, *handlers: Handler) -> Route:
        """Register the handlers creating an item (``POST`` on the collection).

        Args:
            version: Declared version
            *handlers: Handler chain

        Returns:
            Route: The registered route

        Raises:
            UnknownVersionError: If the version is not declared
        """
        return self._register(OperationKind.CREATE, version, "/", handlers)

    def patch(self, version: str, *handlers: Handler) -> Route:
        """Register the handlers partially updating an item (``PATCH /{id}``)."""
        return self._register(OperationKind.PATCH, version, self._item_path(), handlers)

    def remove(self, version: str, *handlers: Handler) -> Route:
        """Register the handlers deleting an item (``DELETE /{id}``)."""
        return self._register(OperationKind.REMOVE, version, self._item_path(), handlers)

    def get_one(self, version: str, *handlers: Handler) -> Route:
        """Register the handlers fetching an item (``GET /{id}``)."""
        return self._register(OperationKind.GET_ONE, version, self._item_path(), handlers)

    def get(self, version: str, *handlers: Handler) -> Route:
        """Register the handlers listing the collection (``GET`` on the collection)."""
        return self._register(OperationKind.GET, version, "/", handlers)

    def method(self, name: str, version: str, *handlers: Handler) -> Route:
        """Register a named action (``PUT /{name}``).

        Args:
            name: Action name, used verbatim as a path segment
            version: Declared version
            *handlers: Handler chain

        Returns:
            Route: The registered route

        Raises:
            UnknownVersionError: If the version is not declared
        """
        return self._register(OperationKind.METHOD, version, f"/{name.lstrip('/')}", handlers)

    def derive_rules(self, kind: Union[OperationKind, str]) -> RuleSet:
        """Compute the effective validation rules of an operation kind.

        Args:
            kind: Operation kind, e.g. ``"create"`` or ``OperationKind.PATCH``

        Returns:
            RuleSet: A fresh mapping on every call

        Raises:
            ValueError: If ``kind`` is unknown
        """
        return derive_rules(self._validate_rules, kind, self._id_attribute_name, self._id_attribute_schema)

    def validator(self, kind: Union[OperationKind, str]) -> Handler:
        """Return a handler validating requests against the rules of ``kind``.

        Args:
            kind: Operation kind

        Returns:
            Handler: A handler to put in front of a chain
        """
        kind = operation_kind(kind)
        # partial updates never fill in defaults
        return validation_handler(
            self.derive_rules(kind),
            OPERATIONS[kind].with_data,
            name=f"{self._root.strip('/').replace('/', '_')}_{kind.value}",
            apply_defaults=kind is not OperationKind.PATCH,
        )

    def routes(self) -> List[RouteInfo]:
        """List the declared endpoints, newest version first, in registration order.

        Returns:
            List[RouteInfo]: One entry per registered route
        """
        table = []
        for version in self._versions:
            for route in self._routers[version].routes:
                suffix = "" if route.path == "/" else route.path
                table.append(RouteInfo(route.method, f"/{version}{self._root}{suffix}", version))
        return table

    def describe(self) -> Dict[str, Any]:
        """Summarize the resource for endpoint listings.

        Returns:
            Dict[str, Any]: Root, versions, identifier settings and routes
        """
        return {
            "root": self._root,
            "versions": list(self._versions),
            "id_attribute_name": self._id_attribute_name,
            "id_attribute_schema": copy.deepcopy(self._id_attribute_schema),
            "routes": [route._asdict() for route in self.routes()],
        }

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point.

        Args:
            scope: ASGI connection scope
            receive: ASGI receive channel
            send: ASGI send channel
        """
        if scope["type"] == "http":
            await self._composer.handle(scope, receive, send)
        elif scope["type"] == "websocket":
            await send({"type": "websocket.close", "code": 1000})
        elif scope["type"] == "lifespan":
            while True:
                message = await receive()
                if message["type"] == "lifespan.startup":
                    await send({"type": "lifespan.startup.complete"})
                elif message["type"] == "lifespan.shutdown":
                    await send({"type": "lifespan.shutdown.complete"})
                    return

    def __repr__(self) -> str:
        return f"ApiResource(root={self._root!r}, versions={list(self._versions)!r})"
