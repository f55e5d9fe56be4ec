"""Registry: the keyed store of every documented entity.

The registry maps canonical path -> entity and is the single source of
truth for whether an entity with a given path exists. It is an explicit
session object: create one per documentation run (or per test) and hand
its ``root`` namespace to the producer.

Invariants:
    - at most one entity per path
    - every stored entity's current ``path`` equals its key

All writes go through one re-entrant lock. ``rekey`` holds that lock across
delete, mutate and register so no other writer sees the entity missing
from both its old and its new key.

Usage:
    registry = Registry()
    foo = NamespaceEntity(registry.root, "Foo")
    registry.register(foo)

    build = MethodEntity(foo, "build", scope="class")
    registry.register(build)
    registry.lookup("Foo.build")   # -> build

    build.set_scope("instance")
    registry.lookup("Foo#build")   # -> build
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from docobjects.config import DEFAULT_CONFIG, RegistryConfig, Separators
from docobjects.exceptions import EntityNotFoundError
from docobjects.objects.base import Entity
from docobjects.objects.namespace import NamespaceEntity, RootNamespace

logger = logging.getLogger(__name__)


class Registry:
    """Canonical path -> Entity store for one session.

    Attributes:
        config: Session configuration (separators, defaults).
        root:   The root namespace. It answers ``lookup("")`` but is never
                stored under a key.
    """

    def __init__(self, config: Optional[RegistryConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._separators = self.config.separators
        self._entries: dict[str, Entity] = {}
        self._lock = threading.RLock()
        self.root = RootNamespace(self)

    @property
    def separators(self) -> Separators:
        return self._separators

    # -- writes --------------------------------------------------------

    def register(self, entity: Entity) -> None:
        """Store ``entity`` under its current path, replacing any occupant."""
        if entity.registry is not self:
            raise ValueError(f"{entity!r} belongs to a different registry")
        with self._lock:
            path = entity.path
            previous = self._entries.get(path)
            self._entries[path] = entity
            if entity.namespace is not None:
                entity.namespace._adopt(entity)
        if previous is not None and previous is not entity:
            logger.debug("Replaced %r at %s", previous, path)
        else:
            logger.debug("Registered %s", path)

    def delete(self, entity: Entity) -> None:
        """Remove ``entity`` from its current path and its namespace's members.

        Does nothing if the path is vacant or held by another entity.
        """
        with self._lock:
            path = entity.path
            if self._entries.get(path) is not entity:
                return
            del self._entries[path]
            if entity.namespace is not None:
                entity.namespace.remove_child(entity)
        logger.debug("Deleted %s", path)

    @contextmanager
    def rekey(self, entity: Entity) -> Iterator[None]:
        """Hold the write lock while an identity-affecting field changes.

        A registered entity is removed from its old key on entry and stored
        under its (possibly new) key on exit, even when the body raises. An
        unregistered entity is left unregistered. Not re-entrant for the
        same entity.
        """
        with self._lock:
            old_path = entity.path
            registered = self._entries.get(old_path) is entity
            if registered:
                del self._entries[old_path]
            try:
                yield
            finally:
                if registered:
                    new_path = entity.path
                    self._entries[new_path] = entity
                    logger.debug("Re-keyed %s -> %s", old_path, new_path)

    def clear(self) -> None:
        """Drop every entry and start over with a fresh root namespace."""
        with self._lock:
            self._entries.clear()
            self.root = RootNamespace(self)

    # -- reads ---------------------------------------------------------

    def lookup(self, path: str) -> Optional[Entity]:
        """Entity at ``path``, the root for ``""``, otherwise None."""
        if path == "":
            return self.root
        return self._entries.get(path)

    def at(self, path: str) -> Entity:
        """Like ``lookup`` but raises EntityNotFoundError when absent."""
        entity = self.lookup(path)
        if entity is None:
            raise EntityNotFoundError(path)
        return entity

    def is_registered(self, entity: Entity) -> bool:
        return self._entries.get(entity.path) is entity

    def paths(self) -> list[str]:
        return list(self._entries)

    def all(self, *types: Union[str, type]) -> list[Entity]:
        """Every registered entity, optionally filtered by type tag or class."""
        entities = list(self._entries.values())
        if not types:
            return entities
        return [e for e in entities if any(_matches(e, t) for t in types)]

    def resolve(self, namespace: Optional[NamespaceEntity], name: str) -> Optional[Entity]:
        """Resolve ``name`` as seen from inside ``namespace``.

        Tries ``name`` joined to ``namespace`` with each separator, then the
        same for every enclosing namespace up to the root, where ``name`` is
        also tried as an absolute path.
        """
        seps = (
            self._separators.namespace,
            self._separators.instance,
            self._separators.class_method,
        )
        chain: list[NamespaceEntity] = []
        current: Optional[NamespaceEntity] = namespace or self.root
        while current is not None:
            chain.append(current)
            current = current.namespace
        # Namespaces built without a parent still see absolute paths
        if chain[-1] is not self.root:
            chain.append(self.root)

        for ns in chain:
            for candidate in _candidates(ns.path, name, seps):
                found = self._entries.get(candidate)
                if found is not None:
                    return found
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entries.values()))

    def __repr__(self) -> str:
        return f"<Registry {len(self._entries)} entities>"


def _matches(entity: Entity, kind: Union[str, type]) -> bool:
    if isinstance(kind, str):
        return entity.type == kind
    return isinstance(entity, kind)


def _candidates(base: str, name: str, seps: tuple[str, ...]) -> list[str]:
    if any(name.startswith(sep) for sep in seps):
        return [base + name]
    if not base:
        return [name] + [sep + name for sep in seps]
    return [base + sep + name for sep in seps]
