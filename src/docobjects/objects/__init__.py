"""Object model for documented definitions.

    Registry
        └── RootNamespace
                └── NamespaceEntity ("Foo")
                        ├── NamespaceEntity ("Foo::Bar")
                        └── MethodEntity ("Foo#run", "Foo.build")

Entities are keyed by canonical path; see ``paths`` for how a path is
built and ``registry`` for how keys are kept consistent.
"""

from docobjects.objects.base import Entity
from docobjects.objects.method import MethodEntity, Parameter
from docobjects.objects.namespace import AttributeInfo, NamespaceEntity, RootNamespace
from docobjects.objects.paths import method_path, method_separator, namespace_path, prefixed_name
from docobjects.objects.registry import Registry
from docobjects.objects.scopes import Scope, Visibility, normalize_scope, normalize_visibility

__all__ = [
    "Entity",
    "NamespaceEntity",
    "RootNamespace",
    "MethodEntity",
    "Parameter",
    "AttributeInfo",
    "Registry",
    "Scope",
    "Visibility",
    "normalize_scope",
    "normalize_visibility",
    "method_path",
    "method_separator",
    "namespace_path",
    "prefixed_name",
]
