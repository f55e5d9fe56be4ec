"""Build a registry from a definition manifest.

A manifest is the plain-data form of what a discovery pass found, e.g. the
JSON a parser stage writes out:

    {
      "namespaces": [{"path": "Shop::Cart", "docstring": "...", "file": "cart.rb", "line": 1}],
      "methods": [
        {"namespace": "Shop::Cart", "name": "total", "scope": "instance",
         "visibility": "public", "parameters": [["tax", "0"]], "explicit": true}
      ],
      "attributes": [
        {"namespace": "Shop::Cart", "name": "items", "scope": "instance",
         "read": "Shop::Cart#items", "write": "Shop::Cart#items="}
      ],
      "aliases": [{"namespace": "Shop::Cart", "method": "Shop::Cart#sum", "aliases": "total"}]
    }

Sections are applied in that order, so attributes and aliases may refer to
any method listed in the manifest. Missing intermediate namespaces are
created on the fly.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from docobjects.exceptions import EntityNotFoundError, ManifestError
from docobjects.objects.method import MethodEntity
from docobjects.objects.namespace import NamespaceEntity
from docobjects.objects.registry import Registry

logger = logging.getLogger(__name__)

SECTIONS = ("namespaces", "methods", "attributes", "aliases")


def ensure_namespace(registry: Registry, path: str) -> NamespaceEntity:
    """Return the namespace at ``path``, creating and registering any gaps."""
    current: NamespaceEntity = registry.root
    if not path:
        return current

    for part in path.split(registry.separators.namespace):
        if not part:
            raise ManifestError(f"empty segment in namespace path {path!r}", "namespaces")
        existing = current.child(part)
        if not isinstance(existing, NamespaceEntity):
            existing = NamespaceEntity(current, part)
            registry.register(existing)
        current = existing
    return current


def load_manifest(data: dict[str, Any], registry: Optional[Registry] = None) -> Registry:
    """Populate ``registry`` (or a new one) from manifest ``data``."""
    if not isinstance(data, dict):
        raise ManifestError("top level must be an object")
    unknown = sorted(set(data) - set(SECTIONS))
    if unknown:
        raise ManifestError(f"unknown sections: {', '.join(unknown)}")

    if registry is None:
        registry = Registry()

    for entry in _section(data, "namespaces"):
        namespace = ensure_namespace(registry, _text(entry, "path", "namespaces"))
        _apply_common(namespace, entry, "namespaces")

    for entry in _section(data, "methods"):
        namespace = ensure_namespace(registry, _text(entry, "namespace", "methods", ""))
        method = MethodEntity(
            namespace,
            _text(entry, "name", "methods"),
            scope=entry.get("scope", "instance"),
        )
        if "visibility" in entry:
            method.visibility = entry["visibility"]
        method.parameters = _parameters(entry)
        method.explicit = entry.get("explicit")
        _apply_common(method, entry, "methods")
        registry.register(method)

    for entry in _section(data, "attributes"):
        namespace = ensure_namespace(registry, _text(entry, "namespace", "attributes", ""))
        namespace.add_attribute(
            entry.get("scope", "instance"),
            _text(entry, "name", "attributes"),
            read=_method_at(registry, _text(entry, "read", "attributes", None), "attributes"),
            write=_method_at(registry, _text(entry, "write", "attributes", None), "attributes"),
        )

    for entry in _section(data, "aliases"):
        namespace = ensure_namespace(registry, _text(entry, "namespace", "aliases", ""))
        method = _method_at(registry, _text(entry, "method", "aliases"), "aliases")
        namespace.add_alias(method, _text(entry, "aliases", "aliases"))

    logger.debug("Loaded manifest: %d entities", len(registry))
    return registry


def _section(data: dict[str, Any], name: str) -> list[dict[str, Any]]:
    entries = data.get(name, [])
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise ManifestError("expected a list of objects", name)
    return entries


_MISSING = object()


def _text(entry: dict[str, Any], key: str, section: str, default: Any = _MISSING) -> Any:
    """String field ``key``; required unless a default is given."""
    if key not in entry:
        if default is _MISSING:
            raise ManifestError(f"missing {key!r} in {entry!r}", section)
        return default
    value = entry[key]
    if value is None and default is None:
        return None
    if not isinstance(value, str):
        raise ManifestError(f"{key!r} must be a string, got {value!r}", section)
    return value


def _parameters(entry: dict[str, Any]) -> list[Any]:
    """Validated ``parameters``: names, or [name] / [name, default] pairs."""
    value = entry.get("parameters", [])
    if not isinstance(value, list):
        raise ManifestError(f"'parameters' must be a list, got {value!r}", "methods")
    for item in value:
        if isinstance(item, str):
            continue
        if (
            isinstance(item, list)
            and 1 <= len(item) <= 2
            and isinstance(item[0], str)
            and (len(item) == 1 or item[1] is None or isinstance(item[1], str))
        ):
            continue
        raise ManifestError(f"bad parameter {item!r}: expected a name or [name, default]", "methods")
    return value


def _method_at(registry: Registry, path: Optional[str], section: str) -> Optional[MethodEntity]:
    if path is None:
        return None
    try:
        entity = registry.at(path)
    except EntityNotFoundError:
        raise ManifestError(f"no method registered at {path!r}", section)
    if not isinstance(entity, MethodEntity):
        raise ManifestError(f"{path!r} is not a method", section)
    return entity


def _apply_common(entity: Any, entry: dict[str, Any], section: str) -> None:
    if "docstring" in entry:
        entity.docstring = _text(entry, "docstring", section)
    if "file" in entry:
        line = entry.get("line")
        if line is not None and (isinstance(line, bool) or not isinstance(line, int)):
            raise ManifestError(f"'line' must be an integer, got {line!r}", section)
        entity.add_file(_text(entry, "file", section), line)
