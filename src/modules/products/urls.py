"""Product URL configuration.

Trailing slashes are optional.  ``/productos`` is kept as a read-only
alias of the list endpoint for older clients.
"""

from __future__ import annotations

from django.urls import re_path
from rest_framework.routers import SimpleRouter

from modules.products.views import ProductViewSet


class OptionalSlashRouter(SimpleRouter):
    """Router whose routes match with or without a trailing slash."""

    def __init__(self) -> None:
        super().__init__()
        self.trailing_slash = "/?"


router = OptionalSlashRouter()
router.register("products", ProductViewSet, basename="product")

urlpatterns = router.urls + [
    re_path(
        r"^productos/?$",
        ProductViewSet.as_view({"get": "list"}),
        name="product-list-legacy",
    ),
]
