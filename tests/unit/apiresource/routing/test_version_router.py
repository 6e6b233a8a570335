# -*- coding: utf-8 -*-
"""Location: ./tests/unit/apiresource/routing/test_version_router.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tests for the per-version route table.
"""

# Third-Party
import pytest

# First-Party
from apiresource.routing.version_router import VersionRouter


async def first(request, call_next):
    """First handler."""
    return await call_next(request)


async def second(request, call_next):
    """Second handler."""
    return await call_next(request)


@pytest.fixture
def router():
    """Router with collection, action and item routes."""
    router = VersionRouter("1.0")
    router.register("get", "/", first)
    router.register("PUT", "/archive", first)
    router.register("GET", "/{_id}", second)
    return router


def test_register_appends(router):
    """Routes are kept in registration order with upper-cased methods."""
    assert [(route.method, route.path) for route in router.routes] == [("GET", "/"), ("PUT", "/archive"), ("GET", "/{_id}")]


def test_empty_pattern_is_collection():
    """An empty pattern registers the collection route."""
    router = VersionRouter("1.0")

    assert router.register("POST", "", first).path == "/"
    assert router.dispatch("POST", "").route.path == "/"


@pytest.mark.parametrize(
    "method, path, expected_path, params",
    [
        ("GET", "/", "/", {}),
        ("GET", "", "/", {}),
        ("PUT", "/archive", "/archive", {}),
        ("GET", "/12", "/{_id}", {"_id": "12"}),
        ("GET", "/12/", "/{_id}", {"_id": "12"}),
        ("HEAD", "/12", "/{_id}", {"_id": "12"}),
        ("get", "/ARCHIVE", "/{_id}", {"_id": "ARCHIVE"}),
    ],
)
def test_dispatch(router, method, path, expected_path, params):
    """The first structural match answers with its path parameters."""
    match = router.dispatch(method, path)

    assert match.route.path == expected_path
    assert match.path_params == params


@pytest.mark.parametrize("method, path", [("POST", "/"), ("DELETE", "/12"), ("GET", "/12/extra"), ("PUT", "/other")])
def test_dispatch_no_match(router, method, path):
    """Requests matching no route yield None."""
    assert router.dispatch(method, path) is None


def test_first_registration_wins():
    """Of two routes with the same method and pattern the first one matches."""
    router = VersionRouter("1.0")
    router.register("GET", "/", first)
    router.register("GET", "/", second)

    assert router.dispatch("GET", "/").route.handlers == (first,)
    assert [match.route.handlers for match in router.iter_matches("GET", "/")] == [(first,), (second,)]


def test_case_insensitive_by_default():
    """Literal segments match regardless of case by default."""
    router = VersionRouter("1.0")
    router.register("PUT", "/archive", first)

    assert router.dispatch("PUT", "/Archive") is not None


def test_case_sensitive():
    """Case sensitive routers compare literal segments exactly."""
    router = VersionRouter("1.0", case_sensitive=True)
    router.register("PUT", "/archive", first)

    assert router.dispatch("PUT", "/Archive") is None
    assert router.dispatch("PUT", "/archive") is not None


def test_strict():
    """Strict routers treat a trailing slash as part of the path."""
    router = VersionRouter("1.0", strict=True)
    router.register("GET", "/{_id}", first)

    assert router.dispatch("GET", "/1/") is None
    assert router.dispatch("GET", "/1") is not None


def test_register_requires_handlers():
    """Routes need at least one callable handler."""
    router = VersionRouter("1.0")

    with pytest.raises(TypeError, match="requires at least one handler"):
        router.register("GET", "/")
    with pytest.raises(TypeError, match="is not callable"):
        router.register("GET", "/", "handler")

    assert router.routes == ()


def test_routes_snapshot(router):
    """The route listing can not be used to modify the router."""
    routes = router.routes

    assert isinstance(routes, tuple)
    assert len(router.routes) == 3
