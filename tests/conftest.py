from __future__ import annotations

import json

import pytest
from django.apps import apps
from rest_framework.test import APIClient

from modules.accounts.services import AuthService
from modules.accounts.tokens import issue_token
from modules.products.repositories import ProductJSONRepository
from modules.products.services import ProductService
from tests.factories import API_KEY, JWT_SECRET, USERS, product_payload, product_record


@pytest.fixture(autouse=True)
def catalog_settings(settings, tmp_path):
    """Known secrets and a private data directory for every test."""
    settings.CATALOG_API_KEY = API_KEY
    settings.CATALOG_JWT_SECRET = JWT_SECRET
    settings.PRODUCTS_FILE = tmp_path / "products.json"
    settings.PRODUCTS_LEGACY_FILE = tmp_path / "Product.json"
    settings.USERS_FILE = tmp_path / "users.json"
    return settings


@pytest.fixture()
def product_repository(tmp_path):
    return ProductJSONRepository(tmp_path / "products.json", tmp_path / "Product.json")


@pytest.fixture(autouse=True)
def product_service(product_repository, monkeypatch):
    """Swap the app-owned repository/service for ``tmp_path``-backed ones."""
    service = ProductService(repository=product_repository)
    config = apps.get_app_config("products")
    monkeypatch.setattr(config, "repository", product_repository)
    monkeypatch.setattr(config, "service", service)
    return service


@pytest.fixture(autouse=True)
def auth_service(monkeypatch):
    service = AuthService(USERS, secret=JWT_SECRET, lifetime=3600)
    monkeypatch.setattr(apps.get_app_config("accounts"), "auth_service", service)
    return service


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def key_client():
    """APIClient sending the configured API key."""
    client = APIClient()
    client.credentials(HTTP_X_API_KEY=API_KEY)
    return client


@pytest.fixture()
def token_for():
    """Factory: signed token for the fixture user with ``role``."""

    def _token(role: str) -> str:
        user = next(u for u in USERS if u.role.value == role)
        return issue_token(user, secret=JWT_SECRET)

    return _token


@pytest.fixture()
def bearer_client(token_for):
    """Factory: APIClient authenticated as the fixture user with ``role``."""

    def _client(role: str) -> APIClient:
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token_for(role)}")
        return client

    return _client


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_product(product_service):
    """Factory: create a product through the service and return it."""

    def _make(**overrides):
        return product_service.create_product(product_payload(**overrides))

    return _make


@pytest.fixture()
def seed_products(catalog_settings):
    """Factory: write ``count`` stored records to the products document."""

    def _seed(count: int, *, wrapped: bool = True) -> list[dict]:
        records = [product_record(index) for index in range(1, count + 1)]
        document = {"products": records} if wrapped else records
        catalog_settings.PRODUCTS_FILE.write_text(json.dumps(document), encoding="utf-8")
        return records

    return _seed


@pytest.fixture()
def stored_products(catalog_settings):
    """Read back the records currently in the products document."""

    def _read() -> list[dict]:
        document = json.loads(catalog_settings.PRODUCTS_FILE.read_text(encoding="utf-8"))
        return document["products"] if isinstance(document, dict) else document

    return _read
