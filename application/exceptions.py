"""
Application-layer exceptions.

These exceptions are raised by repositories and services and translated to
HTTP responses by the handlers in backend.error_handlers:

- DomainValidationError -> 400
- InvalidOperationError -> 400
- ReferenceNotFoundError -> 400
- EntityNotFoundError -> 404
"""

from typing import Optional


class DomainValidationError(ValueError):
    """Caller-supplied data violates a field-level or business rule.

    The message names the offending field and the rule it broke, e.g.
    "Weight must use fractional increments of 0.25".
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidOperationError(Exception):
    """The operation cannot be performed in the current state.

    Raised for conflicts such as a second session on the same date.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ReferenceNotFoundError(InvalidOperationError):
    """A create or update references a missing parent or catalog row."""

    pass


class EntityNotFoundError(InvalidOperationError):
    """The row targeted by an update no longer exists for this owner."""

    pass
