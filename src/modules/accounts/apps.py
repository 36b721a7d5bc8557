import structlog
from django.apps import AppConfig

logger = structlog.get_logger(__name__)


class AccountsConfig(AppConfig):
    """Owns the ``AuthService`` built once at process start."""

    name = "modules.accounts"
    label = "accounts"

    auth_service = None

    def ready(self) -> None:
        from django.conf import settings

        from modules.accounts.repositories import UserJSONRepository
        from modules.accounts.services import AuthService

        if not settings.CATALOG_JWT_SECRET:
            logger.warning("config.jwt_secret_missing")

        self.auth_service = AuthService(
            UserJSONRepository(settings.USERS_FILE).load(),
            secret=settings.CATALOG_JWT_SECRET,
            lifetime=settings.CATALOG_TOKEN_LIFETIME,
            algorithm=settings.CATALOG_JWT_ALGORITHM,
        )
        if not self.auth_service.user_count:
            logger.warning("config.users_missing", path=str(settings.USERS_FILE))
