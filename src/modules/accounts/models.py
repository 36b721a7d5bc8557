"""Account entities.

Users are read-only reference data loaded once at startup.  Passwords are
stored and compared in plaintext, which is known security debt: replace
with salted hashes before exposing this service beyond a lab setting.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class Role(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    password: str
    role: Role

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v: object) -> object:
        # Legacy user files store numeric ids.
        return str(v) if isinstance(v, int) else v


class TokenClaims(BaseModel):
    """Identity decoded from a verified bearer token.

    Attached to ``request.user`` by ``HasBearerToken``; the attributes
    below let DRF treat it like an authenticated user object.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    role: str

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_active(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.username
