import structlog
from django.apps import AppConfig

logger = structlog.get_logger(__name__)


class ProductsConfig(AppConfig):
    """Owns the product repository and service for the whole process.

    Views reach them through ``apps.get_app_config("products")`` instead
    of module-level singletons.
    """

    name = "modules.products"
    label = "products"

    repository = None
    service = None

    def ready(self) -> None:
        from django.conf import settings

        from modules.products.repositories import ProductJSONRepository
        from modules.products.services import ProductService

        if not settings.CATALOG_API_KEY:
            logger.warning("config.api_key_missing")

        self.repository = ProductJSONRepository(
            settings.PRODUCTS_FILE, settings.PRODUCTS_LEGACY_FILE
        )
        self.service = ProductService(repository=self.repository)
