"""Generic document repository interface (Dependency Inversion Principle).

Provides ``IDocumentRepository[T]``, the base abstract class for every
repository backed by a single on-disk document.  Service-layer code
depends on this abstraction, never on the filesystem directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class IDocumentRepository(ABC, Generic[T]):
    """Base repository contract for whole-document storage.

    Type parameter ``T`` is the in-memory representation of the document
    (e.g. ``ProductCollection``, ``list[User]``).
    """

    @abstractmethod
    def load(self) -> T:
        """Read the document and return its in-memory representation."""


class IWritableDocumentRepository(IDocumentRepository[T]):
    @abstractmethod
    def save(self, document: T) -> None:
        """Persist the whole document, replacing the stored one."""
