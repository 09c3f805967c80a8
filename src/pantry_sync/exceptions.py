"""Domain exception hierarchy for the ingredient sync client."""

from __future__ import annotations


class PantryError(RuntimeError):
    """Base class for all domain-level errors."""


class ValidationError(PantryError, ValueError):
    """Raised when a patch is rejected before it reaches the server."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class TransportError(PantryError):
    """Raised when an HTTP round trip to the ingredient server fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EntityNotFoundError(TransportError):
    """Raised when the server reports the addressed entity does not exist."""


class ConfigValidationError(PantryError):
    """Raised when configuration cannot be validated safely."""
