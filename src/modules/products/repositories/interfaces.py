"""Product repository interface.

Extends ``IWritableDocumentRepository`` with the collection type that
carries the on-disk shape alongside the products.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from modules.core.repositories.interfaces import IWritableDocumentRepository
from modules.products.models import Product


class DocumentShape(str, Enum):
    """Outer structure of the stored document, detected once per load."""

    ARRAY = "array"  # [ {...}, {...} ]
    OBJECT = "object"  # { "products": [ {...}, {...} ] }


@dataclass
class ProductCollection:
    """The in-memory collection plus the shape and file it came from.

    Saving writes back to ``source`` using ``shape``, so the file's outer
    structure never drifts.
    """

    products: List[Product] = field(default_factory=list)
    shape: DocumentShape = DocumentShape.OBJECT
    source: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.products)

    def find(self, id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == id), None)

    def find_by_sku(self, sku: str, exclude_id: Optional[str] = None) -> Optional[Product]:
        return next(
            (p for p in self.products if p.sku == sku and p.id != exclude_id),
            None,
        )

    def remove(self, id: str) -> bool:
        for index, product in enumerate(self.products):
            if product.id == id:
                del self.products[index]
                return True
        return False


class IProductRepository(IWritableDocumentRepository[ProductCollection]):
    """Repository contract for the Product collection document."""
