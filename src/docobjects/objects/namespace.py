"""Namespace entities and their bookkeeping tables.

A namespace owns three things:

    children    its member entities, indexed by (name, scope)
    attributes  scope -> attribute name -> AttributeInfo
    aliases     entity -> the name that entity is an alias of

The discovery pipeline fills ``attributes`` and ``aliases`` directly (or via
``add_attribute`` / ``add_alias``); this module only reads them back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Hashable, Iterator, Optional

from docobjects.objects.base import Entity
from docobjects.objects.scopes import (
    Scope,
    ScopeLike,
    VisibilityLike,
    normalize_scope,
    normalize_visibility,
)

if TYPE_CHECKING:
    from docobjects.objects.method import MethodEntity
    from docobjects.objects.registry import Registry


@dataclass
class AttributeInfo:
    """Accessor pair for a declared attribute. Either side may be missing."""

    read: Optional[MethodEntity] = None
    write: Optional[MethodEntity] = None


class NamespaceEntity(Entity):
    """A container definition (module or class-like grouping).

    Attributes:
        attributes: Attribute table, one mapping per scope.
        aliases:    Alias table keyed by the aliasing entity itself; the
                    value is the name it aliases.
    """

    type = "namespace"

    def __init__(
        self,
        namespace: Optional[NamespaceEntity],
        name: str,
        registry: Optional[Registry] = None,
        docstring: str = "",
    ) -> None:
        self._children: dict[tuple[str, Hashable], Entity] = {}
        self.attributes: dict[Scope, dict[str, AttributeInfo]] = {
            Scope.CLASS: {},
            Scope.INSTANCE: {},
        }
        self.aliases: dict[Entity, str] = {}
        super().__init__(namespace, name, registry=registry, docstring=docstring)

    # -- members -------------------------------------------------------

    def _adopt(self, entity: Entity) -> None:
        self._children[entity.child_key] = entity

    def _rekey_child(self, entity: Entity, old_key: tuple[str, Hashable]) -> None:
        if self._children.get(old_key) is not entity:
            return
        del self._children[old_key]
        self._children[entity.child_key] = entity

    def remove_child(self, entity: Entity) -> None:
        """Drop ``entity`` from the member index if it is the one stored."""
        if self._children.get(entity.child_key) is entity:
            del self._children[entity.child_key]

    @property
    def children(self) -> list[Entity]:
        return list(self._children.values())

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.children)

    def child(self, name: str, scope: Optional[ScopeLike] = None) -> Optional[Entity]:
        """Find a member by name.

        Without ``scope`` a nested namespace wins over an instance method,
        which wins over a class method.
        """
        if scope is not None:
            return self._children.get((name, normalize_scope(scope)))
        for key in ((name, None), (name, Scope.INSTANCE), (name, Scope.CLASS)):
            found = self._children.get(key)
            if found is not None:
                return found
        return None

    def meths(
        self,
        scope: Optional[ScopeLike] = None,
        visibility: Optional[VisibilityLike] = None,
    ) -> list[MethodEntity]:
        """Methods of this namespace, optionally filtered."""
        from docobjects.objects.method import MethodEntity

        wanted_scope = normalize_scope(scope) if scope is not None else None
        wanted_visibility = normalize_visibility(visibility) if visibility is not None else None

        result = []
        for entity in self._children.values():
            if not isinstance(entity, MethodEntity):
                continue
            if wanted_scope is not None and entity.scope is not wanted_scope:
                continue
            if wanted_visibility is not None and entity.visibility is not wanted_visibility:
                continue
            result.append(entity)
        return result

    # -- bookkeeping tables --------------------------------------------

    @property
    def class_attributes(self) -> dict[str, AttributeInfo]:
        return self.attributes[Scope.CLASS]

    @property
    def instance_attributes(self) -> dict[str, AttributeInfo]:
        return self.attributes[Scope.INSTANCE]

    def add_attribute(
        self,
        scope: ScopeLike,
        name: str,
        read: Optional[MethodEntity] = None,
        write: Optional[MethodEntity] = None,
    ) -> AttributeInfo:
        """Record (or extend) an attribute's accessor pair."""
        table = self.attributes.setdefault(normalize_scope(scope), {})
        info = table.setdefault(name, AttributeInfo())
        if read is not None:
            info.read = read
        if write is not None:
            info.write = write
        return info

    def add_alias(self, entity: Entity, aliased_name: str) -> None:
        """Record that ``entity`` is an alias of ``aliased_name``."""
        self.aliases[entity] = str(aliased_name)


class RootNamespace(NamespaceEntity):
    """The unnamed top-level namespace owned by a Registry. Its path is empty."""

    type = "root"

    def __init__(self, registry: Registry) -> None:
        super().__init__(None, "", registry=registry)

    @property
    def path(self) -> str:
        return ""

    def __repr__(self) -> str:
        return "<RootNamespace>"
