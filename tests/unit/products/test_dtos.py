"""Unit tests for product DTOs.

Covers:
- CreateProductDTO.from_payload: required fields, price/stock ranges.
- UpdateProductDTO.from_payload: optional fields, nulls ignored,
  blank text rejected, ``changes()`` contents.
- Booleans are not numbers; control characters are not valid text.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import InvalidProductPayload
from tests.factories import product_payload

pytestmark = pytest.mark.unit


class TestCreateProductDTO:
    def test_valid_payload(self):
        dto = CreateProductDTO.from_payload(product_payload())
        assert dto.name == "Widget"
        assert dto.price == 19.99
        assert dto.stock == 10

    def test_is_frozen(self):
        dto = CreateProductDTO.from_payload(product_payload())
        with pytest.raises(ValidationError):
            dto.name = "Other"

    @pytest.mark.parametrize("field", ["name", "sku", "price", "stock", "category"])
    def test_missing_field(self, field):
        payload = product_payload()
        del payload[field]

        with pytest.raises(InvalidProductPayload) as excinfo:
            CreateProductDTO.from_payload(payload)

        assert excinfo.value.status_code == 422
        assert excinfo.value.message == f"Missing required fields: {field}"

    def test_lists_every_missing_field(self):
        with pytest.raises(InvalidProductPayload) as excinfo:
            CreateProductDTO.from_payload({"description": "x"})
        assert excinfo.value.message == (
            "Missing required fields: name, sku, price, stock, category"
        )

    def test_blank_name_counts_as_missing(self):
        with pytest.raises(InvalidProductPayload) as excinfo:
            CreateProductDTO.from_payload(product_payload(name="   "))
        assert excinfo.value.message == "Missing required fields: name"

    def test_stock_zero_is_present(self):
        assert CreateProductDTO.from_payload(product_payload(stock=0)).stock == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"price": 0},
            {"price": -1},
            {"price": "abc"},
            {"stock": -1},
            {"stock": 1.5},
            {"stock": "many"},
            {"price": True},
            {"stock": False},
        ],
    )
    def test_invalid_price_or_stock(self, overrides):
        with pytest.raises(InvalidProductPayload) as excinfo:
            CreateProductDTO.from_payload(product_payload(**overrides))
        assert excinfo.value.message == "Invalid price or stock"

    def test_numeric_strings_are_accepted(self):
        dto = CreateProductDTO.from_payload(product_payload(price="5.5", stock="3"))
        assert dto.price == 5.5
        assert dto.stock == 3

    def test_non_string_name_reported_by_field(self):
        with pytest.raises(InvalidProductPayload) as excinfo:
            CreateProductDTO.from_payload(product_payload(name=["x"]))
        assert excinfo.value.message == "Invalid fields: name"

    @pytest.mark.parametrize("field", ["name", "sku", "description", "category"])
    def test_control_characters_rejected(self, field):
        with pytest.raises(InvalidProductPayload) as excinfo:
            CreateProductDTO.from_payload(product_payload(**{field: "a\x01b"}))
        assert excinfo.value.status_code == 422
        assert excinfo.value.message == f"Invalid fields: {field}"

    def test_tabs_and_newlines_are_text(self):
        dto = CreateProductDTO.from_payload(product_payload(description="a\tb\r\nc"))
        assert dto.description == "a\tb\r\nc"


class TestUpdateProductDTO:
    def test_all_fields_optional(self):
        assert UpdateProductDTO.from_payload({}).changes() == {}

    def test_changes_only_supplied(self):
        dto = UpdateProductDTO.from_payload({"price": 7, "description": ""})
        assert dto.changes() == {"price": 7.0, "description": ""}

    def test_null_values_are_ignored(self):
        dto = UpdateProductDTO.from_payload({"name": None, "stock": 2})
        assert dto.changes() == {"stock": 2}

    def test_unknown_keys_are_ignored(self):
        dto = UpdateProductDTO.from_payload({"id": "x", "createdAt": "y"})
        assert dto.changes() == {}

    @pytest.mark.parametrize(
        "overrides", [{"price": 0}, {"stock": -3}, {"price": True}, {"stock": True}]
    )
    def test_invalid_price_or_stock(self, overrides):
        with pytest.raises(InvalidProductPayload) as excinfo:
            UpdateProductDTO.from_payload(overrides)
        assert excinfo.value.message == "Invalid price or stock"

    @pytest.mark.parametrize("field", ["name", "sku", "category"])
    def test_blank_text_rejected(self, field):
        with pytest.raises(InvalidProductPayload) as excinfo:
            UpdateProductDTO.from_payload({field: ""})
        assert excinfo.value.message == f"Invalid fields: {field}"

    @pytest.mark.parametrize("field", ["name", "description"])
    def test_control_characters_rejected(self, field):
        with pytest.raises(InvalidProductPayload) as excinfo:
            UpdateProductDTO.from_payload({field: "bad\x00value"})
        assert excinfo.value.message == f"Invalid fields: {field}"
