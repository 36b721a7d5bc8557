"""Unit tests for the API exception handler.

Covers:
- Status/message mapping for catalog, Django and DRF exceptions.
- Unexpected exceptions never leak their message.
- WWW-Authenticate on authentication failures.
"""

from __future__ import annotations

import pytest
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from modules.core.exception_handler import (
    INTERNAL_ERROR_MESSAGE,
    catalog_exception_handler,
    resolve_error,
)
from modules.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalError,
    MalformedDocumentError,
)
from modules.products.exceptions import ProductNotFound

pytestmark = pytest.mark.unit


class TestResolveError:
    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (AuthenticationError("Invalid or missing API key"), (401, "Invalid or missing API key")),
            (AuthorizationError("Permission denied"), (403, "Permission denied")),
            (ProductNotFound(), (404, "Product not found")),
            (ConflictError("SKU already exists"), (409, "SKU already exists")),
            (MalformedDocumentError(), (400, "Malformed document")),
            (InternalError(), (500, "Internal server error")),
            (Http404(), (404, "Not found")),
            (drf_exceptions.MethodNotAllowed("PATCH"), (405, 'Method "PATCH" not allowed.')),
        ],
    )
    def test_mapping(self, exc, expected):
        assert resolve_error(exc) == expected

    def test_unexpected_exception_is_opaque(self):
        assert resolve_error(RuntimeError("db password is hunter2")) == (
            500,
            INTERNAL_ERROR_MESSAGE,
        )

    def test_status_override(self):
        assert resolve_error(ConflictError("x", status_code=418)) == (418, "x")


class TestCatalogExceptionHandler:
    def _context(self, path="/products/abc?x=1"):
        return {"request": Request(APIRequestFactory().get(path))}

    def test_builds_error_document(self):
        response = catalog_exception_handler(ProductNotFound(), self._context())

        assert response.status_code == 404
        assert response.data["status"] == 404
        assert response.data["error"] == "Product not found"
        assert response.data["path"] == "/products/abc?x=1"
        assert response.data["timestamp"].endswith("Z")

    def test_authentication_error_sets_challenge(self):
        response = catalog_exception_handler(AuthenticationError(), self._context())
        assert response["WWW-Authenticate"] == 'Bearer realm="api"'

    def test_forbidden_has_no_challenge(self):
        response = catalog_exception_handler(AuthorizationError(), self._context())
        assert not response.has_header("WWW-Authenticate")

    def test_unexpected_exception_becomes_500(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            response = catalog_exception_handler(exc, self._context())
        assert response.status_code == 500
        assert response.data["error"] == INTERNAL_ERROR_MESSAGE

    def test_without_request(self):
        response = catalog_exception_handler(ProductNotFound(), {})
        assert response.data["path"] == ""
