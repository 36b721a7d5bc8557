"""Page/limit coercion for list endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int(value: Any, default: int) -> int:
    """Coerce ``value`` to a positive int, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class PageRequest:
    """A normalised ``(page, limit)`` pair; both are always >= 1."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def coerce(cls, page: Any = None, limit: Any = None) -> PageRequest:
        """Build a request from raw values (query strings, ints or ``None``).

        Absent, non-numeric and non-positive values take the defaults.
        """
        return cls(
            page=_positive_int(page, DEFAULT_PAGE),
            limit=_positive_int(limit, DEFAULT_LIMIT),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def slice(self, items: Sequence[T]) -> list[T]:
        return list(items[self.offset : self.offset + self.limit])


@dataclass(frozen=True)
class Page(Generic[T]):
    page: int
    limit: int
    total: int
    items: list[T]
