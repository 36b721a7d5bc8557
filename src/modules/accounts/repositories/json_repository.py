"""JSON file implementation of the user repository.

Accepts the same two shapes as the product document: ``{"users": [...]}``
or a bare array.  A missing or unreadable file yields an empty directory
so the process still boots; every login then fails with 401.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

import structlog
from pydantic import ValidationError as PydanticValidationError

from modules.accounts.models import User
from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserJSONRepository(IUserRepository):
    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    def load(self) -> List[User]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.warning("users.file_missing", path=str(self._path))
            return []
        except (OSError, ValueError) as exc:
            logger.error("users.file_unreadable", path=str(self._path), error=str(exc))
            return []

        records = _records(raw)
        users: List[User] = []
        for record in records:
            try:
                users.append(User.model_validate(record))
            except PydanticValidationError as exc:
                logger.warning("users.record_skipped", error=str(exc))
        logger.info("users.loaded", count=len(users), path=str(self._path))
        return users


def _records(raw: Any) -> list:
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("users"), list):
        return raw["users"]
    return []
