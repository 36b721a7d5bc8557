"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.exception_handler`` translates them into error documents.
"""

from __future__ import annotations

from modules.core.exceptions import ConflictError, NotFoundError, ValidationError


class SkuAlreadyExists(ConflictError):
    """A product with the same SKU already exists."""

    default_message = "SKU already exists"


class ProductNotFound(NotFoundError):
    default_message = "Product not found"


class InvalidProductPayload(ValidationError):
    """Missing required fields, or price/stock out of range (422)."""
