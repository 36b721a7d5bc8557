"""Product repositories package."""

from modules.products.repositories.interfaces import (
    DocumentShape,
    IProductRepository,
    ProductCollection,
)
from modules.products.repositories.json_repository import ProductJSONRepository

__all__ = [
    "DocumentShape",
    "IProductRepository",
    "ProductCollection",
    "ProductJSONRepository",
]
