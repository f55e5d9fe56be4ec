"""
docobjects - object model and registry for source documentation tools

A parser discovers namespaces, methods and attributes; docobjects keeps one
consistent, path-keyed view of them that renderers and cross-referencers can
query without knowing how the entities were found.
"""

__version__ = "0.1.0"

from .config import RegistryConfig, load_config
from .exceptions import DocObjectsError, EntityNotFoundError, InvalidFieldValue
from .objects import (
    AttributeInfo,
    Entity,
    MethodEntity,
    NamespaceEntity,
    Parameter,
    Registry,
    Scope,
    Visibility,
)

__all__ = [
    "Registry",
    "RegistryConfig",
    "load_config",
    "Entity",
    "NamespaceEntity",
    "MethodEntity",
    "Parameter",
    "AttributeInfo",
    "Scope",
    "Visibility",
    "DocObjectsError",
    "InvalidFieldValue",
    "EntityNotFoundError",
]
