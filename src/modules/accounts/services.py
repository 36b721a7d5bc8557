"""Authentication service (login use case)."""

from __future__ import annotations

import hmac
from typing import TYPE_CHECKING, Any, Iterable, Optional

import structlog

from modules.accounts.exceptions import InvalidCredentials, MissingCredentials
from modules.accounts.tokens import DEFAULT_ALGORITHM, DEFAULT_LIFETIME, issue_token

if TYPE_CHECKING:
    from modules.accounts.models import User

logger = structlog.get_logger(__name__)


class AuthService:
    """Issues session tokens for users of a fixed, read-only directory.

    The directory is captured at construction; it is not reloaded.
    """

    def __init__(
        self,
        users: Iterable[User],
        *,
        secret: str,
        lifetime: int = DEFAULT_LIFETIME,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> None:
        self._users = list(users)
        self._secret = secret
        self._lifetime = lifetime
        self._algorithm = algorithm

    @property
    def user_count(self) -> int:
        return len(self._users)

    def authenticate(self, username: Any, password: Any) -> User:
        """Return the user matching both credentials.

        Raises:
            MissingCredentials: if either field is absent or empty.
            InvalidCredentials: if no user matches.
        """
        if not username or not password:
            raise MissingCredentials()
        user = self._find(str(username), str(password))
        if user is None:
            logger.warning("auth.login_failed", username=str(username))
            raise InvalidCredentials()
        return user

    def login(self, username: Any, password: Any) -> str:
        """Authenticate and return a signed token valid for ``lifetime`` seconds."""
        user = self.authenticate(username, password)
        token = issue_token(
            user,
            secret=self._secret,
            lifetime=self._lifetime,
            algorithm=self._algorithm,
        )
        logger.info("auth.login_succeeded", username=user.username, role=user.role.value)
        return token

    def _find(self, username: str, password: str) -> Optional[User]:
        for user in self._users:
            # Plaintext comparison; see modules.accounts.models.
            if user.username == username and hmac.compare_digest(
                user.password.encode(), password.encode()
            ):
                return user
        return None
