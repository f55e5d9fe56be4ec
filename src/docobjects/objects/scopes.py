"""Closed value sets for method scope and visibility.

Producers hand in whatever their parser yields (an enum member, ``"class"``,
``":private"``, ``"PUBLIC"``); the normalizers below map those onto the
enumerations or raise InvalidFieldValue without touching any entity.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from docobjects.exceptions import InvalidFieldValue


class Scope(Enum):
    """Whether a method belongs to its namespace or to its instances."""

    CLASS = "class"
    INSTANCE = "instance"


class Visibility(Enum):
    """Visibility annotation on a method. Not identity-affecting."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


ScopeLike = Union[Scope, str]
VisibilityLike = Union[Visibility, str]


def _normalize(kind: type[Enum], field: str, value: object) -> Enum:
    if isinstance(value, kind):
        return value
    if isinstance(value, str):
        key = value.strip().lstrip(":").lower()
        for member in kind:
            if member.value == key:
                return member
    raise InvalidFieldValue(field, value, [m.value for m in kind])


def normalize_scope(value: ScopeLike) -> Scope:
    """Coerce ``value`` to a Scope.

    Raises:
        InvalidFieldValue: If ``value`` names no scope.
    """
    return _normalize(Scope, "scope", value)  # type: ignore[return-value]


def normalize_visibility(value: VisibilityLike) -> Visibility:
    """Coerce ``value`` to a Visibility.

    Raises:
        InvalidFieldValue: If ``value`` names no visibility.
    """
    return _normalize(Visibility, "visibility", value)  # type: ignore[return-value]
