"""Entity: the identity every documented definition shares.

An entity is identified by its canonical path, which is never stored. It is
recomputed from the owning namespace's path and the entity's name each time
``path`` is read, so the only way for a key to go stale is for a registered
entity to change an identity-affecting field outside ``Registry.rekey``.

Entities compare and hash by identity. Two distinct objects with the same
path are different entities; the registry decides which one owns the key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Hashable, Optional

from docobjects.objects.paths import namespace_path

if TYPE_CHECKING:
    from docobjects.objects.namespace import NamespaceEntity
    from docobjects.objects.registry import Registry


class Entity:
    """Base class for all documented definitions.

    Attributes:
        docstring: Documentation text attached by the producer.
        files:     Source locations as ``(file, line)`` pairs, first one is
                   the primary definition.
        metadata:  Free-form dictionary for extra attributes.
    """

    type = "entity"

    def __init__(
        self,
        namespace: Optional[NamespaceEntity],
        name: str,
        registry: Optional[Registry] = None,
        docstring: str = "",
    ) -> None:
        if registry is None and namespace is not None:
            registry = namespace.registry
        if registry is None:
            raise ValueError(f"{type(self).__name__} {name!r} needs a namespace or a registry")

        self._name = str(name)
        self._namespace = namespace
        self._registry = registry
        self.docstring = docstring
        self.files: list[tuple[str, Optional[int]]] = []
        self.metadata: dict[str, Any] = {}

        if namespace is not None:
            namespace._adopt(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def namespace(self) -> Optional[NamespaceEntity]:
        """Owning namespace (a back-reference, the namespace owns us)."""
        return self._namespace

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def child_key(self) -> tuple[str, Hashable]:
        """Key under which the owning namespace indexes this entity."""
        return (self._name, None)

    def _owner_path(self) -> Optional[str]:
        if self._namespace is None:
            return None
        return self._namespace.path

    @property
    def path(self) -> str:
        """Canonical path, recomputed on every access."""
        return namespace_path(self._name, self._owner_path(), self._registry.separators)

    def display_name(self, prefixed: bool = False) -> str:
        return self._name

    def add_file(self, file: str, line: Optional[int] = None) -> None:
        """Record a source location; duplicates are ignored."""
        location = (file, line)
        if location not in self.files:
            self.files.append(location)

    @property
    def file(self) -> Optional[str]:
        return self.files[0][0] if self.files else None

    @property
    def line(self) -> Optional[int]:
        return self.files[0][1] if self.files else None

    def is_registered(self) -> bool:
        return self._registry.is_registered(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.path}>"
