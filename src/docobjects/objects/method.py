"""Method entities.

A method's scope is part of its identity: ``Foo#size`` and ``Foo.size`` are
two entities under two registry keys. Scope therefore has no setter; it is
changed through ``set_scope``, which re-keys the entity inside the registry
lock. Visibility, parameters and the explicit flag are plain fields.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Hashable, Iterable, NamedTuple, Optional, Union

from docobjects.objects.base import Entity
from docobjects.objects.namespace import AttributeInfo
from docobjects.objects.paths import method_path, method_separator, prefixed_name
from docobjects.objects.scopes import (
    Scope,
    ScopeLike,
    Visibility,
    VisibilityLike,
    normalize_scope,
    normalize_visibility,
)

if TYPE_CHECKING:
    from docobjects.objects.namespace import NamespaceEntity
    from docobjects.objects.registry import Registry

ASSIGNMENT_MARKER = "="


class Parameter(NamedTuple):
    """One declared parameter; ``default`` is the source text or None."""

    name: str
    default: Optional[str] = None

    def __str__(self) -> str:
        if self.default is None:
            return self.name
        return f"{self.name} = {self.default}"


ParameterLike = Union[Parameter, tuple, str]


class MethodEntity(Entity):
    """A callable member of a namespace.

    Attributes:
        explicit: True when the method is written out in source, False or
                  None when the discovery pipeline synthesized it (for
                  instance a generated attribute accessor).
    """

    type = "method"

    def __init__(
        self,
        namespace: Optional[NamespaceEntity],
        name: str,
        scope: ScopeLike = Scope.INSTANCE,
        registry: Optional[Registry] = None,
        docstring: str = "",
    ) -> None:
        # First assignment: nothing is registered yet, so no re-keying.
        self._scope: Optional[Scope] = None
        self.set_scope(scope)
        self._parameters: list[Parameter] = []
        self.explicit: Optional[bool] = None
        super().__init__(namespace, name, registry=registry, docstring=docstring)
        self._visibility = normalize_visibility(self.registry.config.default_visibility)

    # -- identity ------------------------------------------------------

    @property
    def scope(self) -> Scope:
        return self._scope  # type: ignore[return-value]

    def set_scope(self, value: ScopeLike) -> None:
        """Change the scope, moving the entity to its new registry key.

        The value is validated before anything is touched, so an
        InvalidFieldValue leaves the entity and the registry as they were.
        """
        new_scope = normalize_scope(value)
        if self._scope is None:
            self._scope = new_scope
            return
        if new_scope is self._scope:
            return

        old_key = self.child_key
        with self.registry.rekey(self):
            self._scope = new_scope
            if self.namespace is not None:
                self.namespace._rekey_child(self, old_key)

    @property
    def child_key(self) -> tuple[str, Hashable]:
        return (self.name, self._scope)

    @property
    def sep(self) -> str:
        """``#`` for instance methods, ``.`` or ``::`` for class methods."""
        return method_separator(self.scope, self._owner_path(), self.registry.separators)

    @property
    def path(self) -> str:
        return method_path(self.name, self._owner_path(), self.scope, self.registry.separators)

    def display_name(self, prefixed: bool = False) -> str:
        """Name alone, or ``#name`` for an instance method when ``prefixed``."""
        if not prefixed:
            return self.name
        return prefixed_name(self.name, self.sep, self.registry.separators)

    # -- plain fields --------------------------------------------------

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    @visibility.setter
    def visibility(self, value: VisibilityLike) -> None:
        self._visibility = normalize_visibility(value)

    @property
    def parameters(self) -> list[Parameter]:
        return self._parameters

    @parameters.setter
    def parameters(self, value: Iterable[ParameterLike]) -> None:
        if isinstance(value, str):
            raise TypeError(f"parameters must be a sequence, not a string: {value!r}")
        params = []
        for item in value:
            if isinstance(item, str):
                params.append(Parameter(item))
            elif isinstance(item, (tuple, list)) and 1 <= len(item) <= 2:
                params.append(Parameter(*item))
            else:
                raise TypeError(f"parameter must be a name or (name, default) pair, got {item!r}")
        self._parameters = params

    def is_explicit(self) -> bool:
        return bool(self.explicit)

    def signature(self) -> str:
        """``name(a, b = 1)`` built from the recorded parameters."""
        return f"{self.name}({', '.join(str(p) for p in self._parameters)})"

    # -- namespace table queries ---------------------------------------

    def _attribute_name(self) -> str:
        if self.name.endswith(ASSIGNMENT_MARKER):
            return self.name[: -len(ASSIGNMENT_MARKER)]
        return self.name

    def attr_info(self) -> Optional[AttributeInfo]:
        """The attribute table entry this method reads or writes, if any."""
        if self.namespace is None:
            return None
        return self.namespace.attributes.get(self.scope, {}).get(self._attribute_name())

    def is_attribute(self) -> bool:
        """True if ``name`` (minus a trailing ``=``) is a declared attribute."""
        return self.attr_info() is not None

    def is_reader(self) -> bool:
        info = self.attr_info()
        return info is not None and info.read is self

    def is_writer(self) -> bool:
        info = self.attr_info()
        return info is not None and info.write is self

    def is_alias(self) -> bool:
        """True if the namespace records this method as an alias of another."""
        if self.namespace is None:
            return False
        return self in self.namespace.aliases

    def aliases(self) -> list[Entity]:
        """Methods recorded as aliases of this method's name, in this scope.

        This is a reverse lookup over the alias table: its keys are the
        aliasing methods and its values the names they alias.
        """
        if self.namespace is None:
            return []
        return [
            other
            for other, aliased_name in self.namespace.aliases.items()
            if other is not self
            and aliased_name == self.name
            and getattr(other, "scope", None) is self.scope
        ]
