"""JSON file implementation of the Product repository.

Satisfies ``IProductRepository`` with a single on-disk document.

Loading
    The primary file is tried first, then the legacy file.  If neither
    exists the primary one is created holding ``{"products": []}``.
    A bare array loads with shape ``array``; an object with a
    ``products`` list loads with shape ``object``; anything else (empty,
    malformed, wrong shape) loads as an empty ``object`` collection.
    Records that fail ``Product`` validation are skipped with a warning.

Saving
    The collection is written back to the file it was loaded from, in the
    shape detected at load, via a temporary file and an atomic rename.
    There is no locking: concurrent writers follow last-write-wins.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional, Tuple

import structlog
from pydantic import ValidationError as PydanticValidationError

from modules.core.exceptions import InternalError
from modules.products.models import Product
from modules.products.repositories.interfaces import (
    DocumentShape,
    IProductRepository,
    ProductCollection,
)

logger = structlog.get_logger(__name__)


class ProductJSONRepository(IProductRepository):
    """Concrete Product repository backed by a JSON document."""

    def __init__(self, primary: Path | str, legacy: Optional[Path | str] = None) -> None:
        self._primary = Path(primary)
        self._legacy = Path(legacy) if legacy else None

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self) -> ProductCollection:
        path = self._locate()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("products.read_failed", path=str(path), error=str(exc))
            raise InternalError("Product storage is unavailable") from exc

        records, shape = parse_document(text)
        return ProductCollection(
            products=self._validate(records, path),
            shape=shape,
            source=path,
        )

    def _locate(self) -> Path:
        for candidate in (self._primary, self._legacy):
            if candidate is not None and candidate.is_file():
                return candidate
        self._bootstrap()
        return self._primary

    def _bootstrap(self) -> None:
        self._write(self._primary, {"products": []})
        logger.info("products.document_created", path=str(self._primary))

    @staticmethod
    def _validate(records: List[Any], path: Path) -> List[Product]:
        products: List[Product] = []
        for position, record in enumerate(records):
            try:
                products.append(Product.model_validate(record))
            except PydanticValidationError as exc:
                logger.warning(
                    "products.record_skipped",
                    path=str(path),
                    position=position,
                    error=str(exc),
                )
        return products

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, document: ProductCollection) -> None:
        """Persist the whole collection in its sticky shape."""
        records = [product.to_document() for product in document.products]
        payload: Any = records
        if document.shape is DocumentShape.OBJECT:
            payload = {"products": records}
        target = document.source or self._primary
        self._write(target, payload)
        logger.info(
            "products.saved",
            path=str(target),
            shape=document.shape.value,
            count=len(records),
        )

    @staticmethod
    def _write(path: Path, payload: Any) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(payload, handle, indent=2, ensure_ascii=False)
                    handle.write("\n")
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error("products.write_failed", path=str(path), error=str(exc))
            raise InternalError("Product storage is unavailable") from exc


def parse_document(text: str) -> Tuple[List[Any], DocumentShape]:
    """Split raw document text into ``(records, shape)``.

    Never raises: unusable content normalises to ``([], OBJECT)``.
    """
    if not text.strip():
        return [], DocumentShape.OBJECT
    try:
        raw = json.loads(text)
    except ValueError:
        logger.warning("products.document_unparseable")
        return [], DocumentShape.OBJECT
    if isinstance(raw, list):
        return raw, DocumentShape.ARRAY
    if isinstance(raw, dict) and isinstance(raw.get("products"), list):
        return raw["products"], DocumentShape.OBJECT
    logger.warning("products.document_wrong_shape", type=type(raw).__name__)
    return [], DocumentShape.OBJECT
