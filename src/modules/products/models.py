"""Product entity.

Business rules implemented:
- Price must be greater than zero.
- Stock cannot be negative.
- ``name``, ``sku`` and ``category`` are non-empty.
- SKU uniqueness across the collection is enforced by ``ProductService``.

Attribute names are snake_case in Python and camelCase on the wire and on
disk (``createdAt`` / ``updatedAt``).  Unknown keys found in the stored
document are kept so that saving never drops them.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# Code points XML 1.0 cannot represent, even as character references.
XML_ILLEGAL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

# Wire order, also used for XML elements.
PRODUCT_FIELDS = (
    "id",
    "name",
    "sku",
    "description",
    "price",
    "stock",
    "category",
    "createdAt",
    "updatedAt",
)


class Product(BaseModel):
    """Product aggregate root, persisted as one record of the collection."""

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="allow",
    )

    id: str
    name: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    description: str = ""
    price: float = Field(gt=0, allow_inf_nan=False)
    stock: int = Field(ge=0)
    category: str = Field(min_length=1)
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v

    @field_validator("description", mode="before")
    @classmethod
    def description_defaults_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_serializer("price")
    def serialize_price(self, price: float) -> float | int:
        return int(price) if math.isfinite(price) and price.is_integer() else price

    def to_document(self) -> Dict[str, Any]:
        """Wire/disk representation with camelCase keys, known fields first."""
        return self.model_dump(by_alias=True)

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
