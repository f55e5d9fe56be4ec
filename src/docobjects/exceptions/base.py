"""Base exception for docobjects."""

from typing import Any, Dict, Optional


class DocObjectsError(Exception):
    """Base exception for all docobjects errors.

    ``details`` carries the structured context of the failure (field names,
    offending values, paths). Values are stored as strings so an error can
    always be rendered or serialized without touching live entities.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = {k: str(v) for k, v in (details or {}).items()}

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form used by ``--json`` output."""
        return {"type": self.kind, "message": self.message, "details": dict(self.details)}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message
