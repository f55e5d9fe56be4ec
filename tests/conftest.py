"""Shared test fixtures for docobjects tests.

Every test gets its own Registry; nothing is shared between tests.
"""

import pytest

from docobjects.objects import MethodEntity, NamespaceEntity, Registry


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def registry():
    """Fresh, empty registry with default separators."""
    return Registry()


@pytest.fixture
def foo(registry):
    """Registered top-level namespace ``Foo``."""
    namespace = NamespaceEntity(registry.root, "Foo")
    registry.register(namespace)
    return namespace


@pytest.fixture
def make_method(registry):
    """Factory: build and register a method in one call."""

    def _make(namespace, name, scope="instance"):
        method = MethodEntity(namespace, name, scope=scope)
        registry.register(method)
        return method

    return _make


@pytest.fixture
def sample_manifest():
    """Small manifest covering every section."""
    return {
        "namespaces": [
            {"path": "Shop", "docstring": "Storefront."},
            {"path": "Shop::Cart", "file": "lib/shop/cart.rb", "line": 3},
        ],
        "methods": [
            {
                "namespace": "Shop::Cart",
                "name": "total",
                "parameters": [["tax", "0"]],
                "explicit": True,
            },
            {"namespace": "Shop::Cart", "name": "sum"},
            {"namespace": "Shop::Cart", "name": "items"},
            {"namespace": "Shop::Cart", "name": "items="},
            {"namespace": "Shop::Cart", "name": "build", "scope": "class"},
            {"namespace": "Shop::Cart", "name": "reset", "visibility": "private"},
            {"name": "run"},
        ],
        "attributes": [
            {
                "namespace": "Shop::Cart",
                "name": "items",
                "read": "Shop::Cart#items",
                "write": "Shop::Cart#items=",
            }
        ],
        "aliases": [
            {"namespace": "Shop::Cart", "method": "Shop::Cart#sum", "aliases": "total"},
        ],
    }
