"""Authorization guards.

Each guard is a DRF permission class.  Views list them in order and DRF
evaluates them left to right, stopping at the first failure.  Guards raise
catalog exceptions themselves so the failure carries its own status and
message instead of DRF's generic ``PermissionDenied``.

Composition used by the catalog routes::

    reads:   [HasApiKey]
    writes:  [HasBearerToken, role_required("editor", "admin")]
    delete:  [HasBearerToken, role_required("admin")]
"""

from __future__ import annotations

import hmac

import structlog
from django.conf import settings
from rest_framework.permissions import BasePermission

from modules.accounts.models import TokenClaims
from modules.accounts.tokens import verify_token
from modules.core.exceptions import AuthenticationError, AuthorizationError

logger = structlog.get_logger(__name__)


class HasApiKey(BasePermission):
    """Require the configured API-key header to match the server secret."""

    def has_permission(self, request, view) -> bool:
        expected = settings.CATALOG_API_KEY
        supplied = request.headers.get(settings.CATALOG_API_KEY_HEADER, "")
        if not expected or not supplied or not hmac.compare_digest(
            supplied.encode(), expected.encode()
        ):
            logger.warning("guard.api_key_rejected", path=request.path)
            raise AuthenticationError("Invalid or missing API key")
        return True


class HasBearerToken(BasePermission):
    """Require a valid ``Authorization: Bearer <token>`` header.

    On success the decoded claims become ``request.user`` and the raw
    token ``request.auth``.
    """

    keyword = "Bearer"

    def has_permission(self, request, view) -> bool:
        token = self._extract_token(request.headers.get("Authorization", ""))
        claims = verify_token(
            token,
            secret=settings.CATALOG_JWT_SECRET,
            algorithm=settings.CATALOG_JWT_ALGORITHM,
        )
        request.user = claims
        request.auth = token
        return True

    @classmethod
    def _extract_token(cls, header: str) -> str:
        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != cls.keyword.lower():
            logger.warning("guard.bearer_missing")
            raise AuthenticationError("Missing Authorization Bearer token")
        return parts[1]


class RoleRequired(BasePermission):
    """Require the role on the attached claims to be in ``allowed_roles``.

    Use ``role_required(...)`` to build a concrete guard.
    """

    allowed_roles: frozenset[str] = frozenset()

    def has_permission(self, request, view) -> bool:
        claims = request.user
        if not isinstance(claims, TokenClaims):
            raise AuthenticationError("Missing Authorization Bearer token")
        if claims.role not in self.allowed_roles:
            logger.warning(
                "guard.role_rejected",
                username=claims.username,
                role=claims.role,
                allowed=sorted(self.allowed_roles),
            )
            raise AuthorizationError("Permission denied")
        return True


def role_required(*roles: str) -> type[RoleRequired]:
    """Return a guard class admitting only ``roles``."""
    names = frozenset(getattr(role, "value", role) for role in roles)
    return type(
        f"RoleRequired_{'_'.join(sorted(names))}",
        (RoleRequired,),
        {"allowed_roles": names},
    )
