"""User repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IDocumentRepository

if TYPE_CHECKING:
    from modules.accounts.models import User


class IUserRepository(IDocumentRepository["list[User]"]):
    """Read-only repository contract for the user directory."""
