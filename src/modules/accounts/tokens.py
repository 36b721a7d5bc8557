"""Signed, time-limited session tokens (HS256 JWT via PyJWT).

Security decisions
------------------
* **Fail Closed**: an empty signing secret rejects every token and
  refuses to issue new ones; there is no fallback secret.
* ``algorithms`` is pinned to the configured value, never taken from the
  incoming token header.
* ``exp`` is always required and validated.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import structlog
from jwt.exceptions import PyJWTError
from pydantic import ValidationError as PydanticValidationError

from modules.accounts.models import TokenClaims, User
from modules.core.exceptions import AuthenticationError, InternalError

logger = structlog.get_logger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_LIFETIME = 3600


def issue_token(
    user: User,
    *,
    secret: str,
    lifetime: int = DEFAULT_LIFETIME,
    algorithm: str = DEFAULT_ALGORITHM,
    now: datetime | None = None,
) -> str:
    """Sign ``{id, username, role}`` for ``user`` with an expiry."""
    if not secret:
        raise InternalError("Token signing secret is not configured")
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "id": user.id,
        "username": user.username,
        "role": user.role.value,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=lifetime),
    }
    return pyjwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, *, secret: str, algorithm: str = DEFAULT_ALGORITHM) -> TokenClaims:
    """Verify signature and expiry, returning the decoded claims.

    Raises:
        AuthenticationError: on any verification failure.
    """
    if not secret:
        logger.warning("token.secret_missing")
        raise AuthenticationError("Invalid or expired token")
    try:
        payload = pyjwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp"]},
        )
        return TokenClaims.model_validate(payload)
    except (PyJWTError, PydanticValidationError) as exc:
        logger.warning("token.validation_failed", error=str(exc))
        raise AuthenticationError("Invalid or expired token") from exc
