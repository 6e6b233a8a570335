# Third-Party
import pytest

# First-Party
from apiresource.utils.url_utils import get_route_path, normalize_root, strip_prefix


@pytest.mark.parametrize("root, expected", [("entities", "/entities"), ("/entities", "/entities"), ("a/b", "/a/b")])
def test_normalize_root(root, expected):
    """A leading slash is added only when missing."""
    assert normalize_root(root) == expected


@pytest.mark.parametrize(
    "scope, expected",
    [
        ({"path": "/api/1.0/entities", "root_path": "/api"}, "/1.0/entities"),  # root_path kept in path
        ({"path": "/1.0/entities", "root_path": "/api"}, "/1.0/entities"),  # path already stripped
        ({"path": "/1.0/entities"}, "/1.0/entities"),  # no mount
        ({"path": "/apiv2/x", "root_path": "/api"}, "/apiv2/x"),  # prefix of a longer segment
    ],
)
def test_get_route_path(scope, expected):
    """The path relative to the mount point is derived from the scope."""
    assert get_route_path(scope) == expected


@pytest.mark.parametrize(
    "path, prefix, case_sensitive, expected",
    [
        ("/1.0/entities", "/1.0/entities", False, "/"),
        ("/1.0/entities/", "/1.0/entities", False, "/"),
        ("/1.0/entities/3", "/1.0/entities", True, "/3"),
        ("/1.0/ENTITIES/3", "/1.0/entities", True, None),
        ("/1.0/ENTITIES/3", "/1.0/entities", False, "/3"),
        ("/1.0/ent", "/1.0/entities", False, None),
    ],
)
def test_strip_prefix(path, prefix, case_sensitive, expected):
    """Prefixes only match on segment boundaries."""
    assert strip_prefix(path, prefix, case_sensitive) == expected
