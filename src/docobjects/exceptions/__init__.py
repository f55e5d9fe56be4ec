"""Exception hierarchy for docobjects."""

from .base import DocObjectsError
from .config import ConfigurationError, InvalidConfigError
from .model import EntityNotFoundError, InvalidFieldValue, ManifestError, ModelError

__all__ = [
    "DocObjectsError",
    "ModelError",
    "InvalidFieldValue",
    "EntityNotFoundError",
    "ManifestError",
    "ConfigurationError",
    "InvalidConfigError",
]
