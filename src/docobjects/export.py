"""Export registry contents as plain data or a rich table.

Renderers and debugging tools read entities through these helpers rather
than poking at private fields:

    registry_to_dict(registry)   -> {"context": {...}, "entities": [...]}
    render_registry(registry)    -> rich.table.Table
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from rich.table import Table

from docobjects.objects.base import Entity
from docobjects.objects.method import MethodEntity
from docobjects.objects.registry import Registry


def entity_to_dict(entity: Entity) -> dict[str, Any]:
    """Returns a dictionary representation of the entity."""
    data: dict[str, Any] = {
        "path": entity.path,
        "type": entity.type,
        "name": entity.name,
        "namespace": entity.namespace.path if entity.namespace is not None else None,
        "docstring": entity.docstring,
        "files": [list(location) for location in entity.files],
    }
    if isinstance(entity, MethodEntity):
        data.update(
            {
                "scope": entity.scope.value,
                "visibility": entity.visibility.value,
                "parameters": [list(p) for p in entity.parameters],
                "signature": entity.signature(),
                "explicit": entity.is_explicit(),
                "attribute": entity.is_attribute(),
                "alias": entity.is_alias(),
                "aliases": [other.path for other in entity.aliases()],
            }
        )
    return data


def registry_to_dict(registry: Registry, types: Sequence[str] = ()) -> dict[str, Any]:
    """Serializes the registry (optionally one entity type) to primitives."""
    entities = sorted(registry.all(*types), key=lambda e: e.path)
    return {
        "context": {
            "total_entities": len(registry),
            "exported": len(entities),
        },
        "entities": [entity_to_dict(e) for e in entities],
    }


def _flags(entity: Entity) -> str:
    if not isinstance(entity, MethodEntity):
        return ""
    flags = []
    if entity.is_explicit():
        flags.append("explicit")
    if entity.is_attribute():
        flags.append("attr")
    if entity.is_alias():
        flags.append("alias")
    return ", ".join(flags)


def render_registry(registry: Registry, types: Sequence[str] = (), title: Optional[str] = None) -> Table:
    """Build a table of registered entities sorted by path."""
    table = Table(title=title or f"Registry ({len(registry)} entities)")
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Visibility")
    table.add_column("Signature")
    table.add_column("Flags", style="yellow")

    for entity in sorted(registry.all(*types), key=lambda e: e.path):
        if isinstance(entity, MethodEntity):
            visibility = entity.visibility.value
            signature = entity.signature()
        else:
            visibility = ""
            signature = ""
        table.add_row(entity.path, entity.type, visibility, signature, _flags(entity))
    return table
