"""Canonical path computation.

Every registry key is derived here from three inputs: the owning
namespace's path, the entity's name, and (for methods) its scope. Nothing
is cached; callers recompute whenever a key is needed.

    Owner      Scope      Separator        Example
    root       instance   instance         #run
    root       class      namespace        ::build
    Foo        instance   instance         Foo#run
    Foo        class      class_method     Foo.build

The root namespace has the empty path, and ``None`` is treated the same.
"""

from __future__ import annotations

from typing import Optional

from docobjects.config import Separators
from docobjects.objects.scopes import Scope

DEFAULT_SEPARATORS = Separators()


def is_top_level(namespace_path: Optional[str]) -> bool:
    """True when the owner is the root namespace or absent."""
    return not namespace_path


def method_separator(
    scope: Scope,
    namespace_path: Optional[str],
    separators: Separators = DEFAULT_SEPARATORS,
) -> str:
    """Separator placed between a method's namespace and its name."""
    if scope is Scope.INSTANCE:
        return separators.instance
    if is_top_level(namespace_path):
        return separators.namespace
    return separators.class_method


def method_path(
    name: str,
    namespace_path: Optional[str],
    scope: Scope,
    separators: Separators = DEFAULT_SEPARATORS,
) -> str:
    """Canonical path of a method.

    Top-level methods keep their separator as a prefix so that ``#run`` and
    ``::run`` stay distinct keys.
    """
    sep = method_separator(scope, namespace_path, separators)
    if is_top_level(namespace_path):
        return sep + name
    return f"{namespace_path}{sep}{name}"


def namespace_path(
    name: str,
    parent_path: Optional[str],
    separators: Separators = DEFAULT_SEPARATORS,
) -> str:
    """Canonical path of a namespace (or any non-method entity)."""
    if is_top_level(parent_path):
        return name
    return f"{parent_path}{separators.namespace}{name}"


def prefixed_name(
    name: str,
    sep: str,
    separators: Separators = DEFAULT_SEPARATORS,
) -> str:
    """``#name`` for instance methods, the bare name otherwise."""
    if sep == separators.instance:
        return sep + name
    return name
