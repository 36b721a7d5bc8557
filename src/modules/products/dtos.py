"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the decoded request body and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.

Both expose ``from_payload`` which turns a raw mapping into a DTO or
raises ``InvalidProductPayload`` (422) with a stable message.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Mapping, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from modules.products.exceptions import InvalidProductPayload
from modules.products.models import XML_ILLEGAL_CHARS

REQUIRED_FIELDS = ("name", "sku", "price", "stock", "category")
MUTABLE_FIELDS = ("name", "sku", "description", "price", "stock", "category")
TEXT_FIELDS = ("name", "sku", "description", "category")

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_PRICE_OR_STOCK_MESSAGE = "Invalid price or stock"


def _not_bool(value: Any) -> Any:
    # JSON true/false would otherwise coerce to 1/0.
    if isinstance(value, bool):
        raise ValueError("must be a number")
    return value


def _encodable(value: Optional[str]) -> Optional[str]:
    if value is not None and XML_ILLEGAL_CHARS.search(value):
        raise ValueError("contains control characters")
    return value


Price = Annotated[float, BeforeValidator(_not_bool), Field(gt=0, allow_inf_nan=False)]
Stock = Annotated[int, BeforeValidator(_not_bool), Field(ge=0)]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _translate(exc: PydanticValidationError) -> InvalidProductPayload:
    fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
    if any(field in ("price", "stock") for field in fields):
        return InvalidProductPayload(INVALID_PRICE_OR_STOCK_MESSAGE)
    return InvalidProductPayload(f"Invalid fields: {', '.join(fields)}")


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name``, ``sku``, ``price``, ``stock``, ``category`` are present.
    - ``price`` is greater than zero.
    - ``stock`` is non-negative.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    sku: str
    price: Price
    stock: Stock
    category: str
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def description_defaults_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def text_is_encodable(cls, v: str) -> str:
        return _encodable(v)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> CreateProductDTO:
        missing = [name for name in REQUIRED_FIELDS if _is_blank(payload.get(name))]
        if missing:
            raise InvalidProductPayload(
                f"{MISSING_FIELDS_MESSAGE}: {', '.join(missing)}"
            )
        data = {name: payload[name] for name in MUTABLE_FIELDS if name in payload}
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            raise _translate(exc) from exc


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied, non-null fields are applied.
    ``changes()`` returns exactly those.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    sku: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Price] = None
    stock: Optional[Stock] = None
    category: Optional[str] = None

    @field_validator("name", "sku", "category")
    @classmethod
    def must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def text_is_encodable(cls, v: Optional[str]) -> Optional[str]:
        return _encodable(v)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> UpdateProductDTO:
        data = {
            name: payload[name]
            for name in MUTABLE_FIELDS
            if name in payload and payload[name] is not None
        }
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            raise _translate(exc) from exc

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)
