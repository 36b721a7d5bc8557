"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Every operation reloads the document first, so edits made to the file
outside the process are visible on the next request.  Mutations validate
everything before the single ``save`` at the end; a failed request never
writes.

Business rules enforced here:
- SKU must be unique across the collection.
- Price must be greater than zero (validated by DTO).
- Stock cannot be negative (validated by DTO).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

import structlog
import uuid6

from modules.core.pagination import Page, PageRequest
from modules.core.timestamps import now_iso
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductNotFound, SkuAlreadyExists
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import (
        IProductRepository,
        ProductCollection,
    )

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, payload: Mapping[str, Any]) -> Product:
        """Create a new product after enforcing validation and uniqueness.

        Raises:
            InvalidProductPayload: missing fields, or invalid price/stock.
            SkuAlreadyExists: if the SKU is already taken.
        """
        dto = CreateProductDTO.from_payload(payload)
        log = logger.bind(sku=dto.sku)

        collection = self._repo.load()
        if collection.find_by_sku(dto.sku):
            log.warning("product.duplicate_sku")
            raise SkuAlreadyExists()

        now = now_iso()
        product = Product(
            id=str(uuid6.uuid7()),
            name=dto.name,
            sku=dto.sku,
            description=dto.description,
            price=dto.price,
            stock=dto.stock,
            category=dto.category,
            created_at=now,
            updated_at=now,
        )
        collection.products.append(product)
        self._repo.save(collection)
        log.info("product.created", product_id=product.id)
        return product

    def update_product(self, id: str, payload: Mapping[str, Any]) -> Product:
        """Apply the supplied fields to an existing product.

        Fields absent from ``payload`` are left untouched; ``updatedAt`` is
        always refreshed.

        Raises:
            ProductNotFound: if the product does not exist.
            SkuAlreadyExists: if another product owns the new SKU.
            InvalidProductPayload: invalid price/stock or empty text fields.
        """
        collection = self._repo.load()
        product = self._get_or_raise(collection, id)
        log = logger.bind(product_id=id)

        sku = payload.get("sku")
        if sku is not None and collection.find_by_sku(sku, exclude_id=id):
            log.warning("product.duplicate_sku", sku=sku)
            raise SkuAlreadyExists("SKU already exists on another product")

        dto = UpdateProductDTO.from_payload(payload)
        changes = dto.changes()
        for field, value in changes.items():
            setattr(product, field, value)
        product.updated_at = now_iso()

        self._repo.save(collection)
        log.info("product.updated", fields=sorted(changes))
        return product

    def delete_product(self, id: str) -> None:
        """Remove a product from the collection.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        collection = self._repo.load()
        if not collection.remove(id):
            raise ProductNotFound()
        self._repo.save(collection)
        logger.info("product.deleted", product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, page: Any = None, limit: Any = None) -> Page[Product]:
        """Return one page of products in stored order.

        ``page`` and ``limit`` default to 1 and 10 when absent or
        non-positive.
        """
        request = PageRequest.coerce(page, limit)
        products = self._repo.load().products
        return Page(
            page=request.page,
            limit=request.limit,
            total=len(products),
            items=request.slice(products),
        )

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by exact id.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(self._repo.load(), id)
        logger.info("product.retrieved", product_id=id)
        return product

    @staticmethod
    def _get_or_raise(collection: ProductCollection, id: str) -> Product:
        product = collection.find(id)
        if product is None:
            raise ProductNotFound()
        return product
