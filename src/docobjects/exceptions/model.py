"""Object model exceptions: field values and registry lookups."""

from typing import Any, Iterable

from .base import DocObjectsError


class ModelError(DocObjectsError):
    """Base class for object model errors."""

    pass


class InvalidFieldValue(ModelError):
    """Raised when a scope or visibility value is not in its closed set.

    The entity being mutated is left untouched.
    """

    def __init__(self, field: str, value: Any, allowed: Iterable[str]):
        allowed = tuple(allowed)
        super().__init__(
            f"Invalid value for {field}: {value!r}",
            details={"field": field, "value": repr(value), "allowed": "|".join(allowed)},
        )
        self.field = field
        self.value = value
        self.allowed = allowed


class EntityNotFoundError(ModelError):
    """Raised by strict lookups when no entity is registered at a path."""

    def __init__(self, path: str):
        super().__init__(f"No entity registered at {path!r}", details={"path": path})
        self.path = path


class ManifestError(ModelError):
    """Raised when a definition manifest is malformed."""

    def __init__(self, reason: str, section: str = ""):
        details = {"reason": reason}
        if section:
            details["section"] = section
        super().__init__(f"Invalid manifest: {reason}", details=details)
        self.reason = reason
        self.section = section
