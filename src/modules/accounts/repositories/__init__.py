"""User repositories package."""

from modules.accounts.repositories.interfaces import IUserRepository
from modules.accounts.repositories.json_repository import UserJSONRepository

__all__ = ["IUserRepository", "UserJSONRepository"]
