# -*- coding: utf-8 -*-
"""Location: ./tests/unit/apiresource/routing/test_cascade.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tests for cross-version fallback dispatch.
"""

# Third-Party
import pytest

# First-Party
from apiresource.routing.cascade import CascadeComposer
from apiresource.routing.version_router import VersionRouter

VERSIONS = ("2.0", "1.1", "1.0")


async def handler(request, call_next):
    """Terminal handler, never run here."""
    return await call_next(request)


@pytest.fixture
def routers():
    """One empty router per declared version."""
    return {version: VersionRouter(version) for version in VERSIONS}


@pytest.fixture
def composer(routers):
    """Composer over the declared versions at /entities."""
    return CascadeComposer("/entities", VERSIONS, routers)


def answering_version(composer, version, method="GET", path=""):
    """Return the version whose router answers, or None."""
    found = composer.dispatch(method, f"/{version}/entities{path}")
    return None if found is None else found.router.version


def test_mounts(composer):
    """Every version is mounted under its prefix with all lower versions."""
    assert composer.mounts == (
        ("/2.0/entities", "2.0", ("2.0", "1.1", "1.0")),
        ("/1.1/entities", "1.1", ("1.1", "1.0")),
        ("/1.0/entities", "1.0", ("1.0",)),
    )


@pytest.mark.parametrize(
    "registered, expected",
    [
        (["1.0"], {"1.0": "1.0", "1.1": "1.0", "2.0": "1.0"}),
        (["1.0", "1.1", "2.0"], {"1.0": "1.0", "1.1": "1.1", "2.0": "2.0"}),
        (["1.0", "2.0"], {"1.0": "1.0", "1.1": "1.0", "2.0": "2.0"}),
        (["1.0", "1.1"], {"1.0": "1.0", "1.1": "1.1", "2.0": "1.1"}),
        (["2.0"], {"1.0": None, "1.1": None, "2.0": "2.0"}),
        ([], {"1.0": None, "1.1": None, "2.0": None}),
    ],
)
def test_fallback(routers, composer, registered, expected):
    """Each version resolves to the nearest lower or equal version with a route."""
    for version in registered:
        routers[version].register("GET", "/", handler)

    assert {version: answering_version(composer, version) for version in VERSIONS} == expected


def test_fallback_per_route(routers, composer):
    """Fallback is decided per method and path, not per version."""
    routers["1.0"].register("GET", "/", handler)
    routers["1.0"].register("GET", "/{_id}", handler)
    routers["2.0"].register("GET", "/{_id}", handler)

    assert answering_version(composer, "2.0") == "1.0"
    assert answering_version(composer, "2.0", path="/5") == "2.0"
    assert answering_version(composer, "1.1", path="/5") == "1.0"
    assert answering_version(composer, "2.0", method="POST") is None


def test_iter_matches_order(routers, composer):
    """Matches are produced newest applicable version first."""
    for version in VERSIONS:
        routers[version].register("GET", "/", handler)

    assert [found.router.version for found in composer.iter_matches("GET", "/1.1/entities")] == ["1.1", "1.0"]


@pytest.mark.parametrize("path", ["/3.0/entities", "/1.0/others", "/1.0/entitiesx", "/entities", ""])
def test_unmounted_paths(routers, composer, path):
    """Paths outside the version mounts match nothing."""
    routers["1.0"].register("GET", "/", handler)

    assert composer.dispatch("GET", path) is None


def test_prefix_case(routers):
    """Mount prefixes follow the case sensitivity setting."""
    routers["1.0"].register("GET", "/", handler)

    assert CascadeComposer("/entities", VERSIONS, routers).dispatch("GET", "/1.0/ENTITIES") is not None
    assert CascadeComposer("/entities", VERSIONS, routers, case_sensitive=True).dispatch("GET", "/1.0/ENTITIES") is None
