"""Catalog exception taxonomy.

Every failure the API can report is a ``CatalogError`` subclass carrying
its HTTP ``status_code`` and a human-readable ``message``.  Services and
guards raise them; only ``modules.core.exception_handler`` turns them into
responses.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all catalog failures."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(CatalogError):
    """Missing or invalid API key / bearer token."""

    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(CatalogError):
    """Authenticated caller lacks the role required by the route."""

    status_code = 403
    default_message = "Forbidden"


class ValidationError(CatalogError):
    """Missing or malformed input fields (400 or 422)."""

    status_code = 422
    default_message = "Invalid input"


class MalformedDocumentError(ValidationError):
    """The request body is not a well-formed JSON or XML document."""

    status_code = 400
    default_message = "Malformed document"


class ConflictError(CatalogError):
    status_code = 409
    default_message = "Conflict"


class NotFoundError(CatalogError):
    status_code = 404
    default_message = "Not found"


class InternalError(CatalogError):
    """Unexpected failure, e.g. storage I/O."""
