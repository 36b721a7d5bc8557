"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Guards are chosen per action; domain exceptions propagate to the
exception handler, so no view formats an error itself.
"""

from __future__ import annotations

from django.apps import apps
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.accounts.models import Role
from modules.core.exceptions import MalformedDocumentError
from modules.core.permissions import HasApiKey, HasBearerToken, role_required
from modules.products.renderers import PRODUCT, PRODUCT_LIST
from modules.products.services import ProductService

CanEdit = role_required(Role.EDITOR, Role.ADMIN)
CanDelete = role_required(Role.ADMIN)


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    Reads need the API key; writes need a bearer token plus a role.
    The service is owned by the ``products`` app config.
    """

    lookup_value_regex = "[^/]+"

    guards = {
        "list": [HasApiKey],
        "retrieve": [HasApiKey],
        "create": [HasBearerToken, CanEdit],
        "update": [HasBearerToken, CanEdit],
        "partial_update": [HasBearerToken, CanEdit],
        "destroy": [HasBearerToken, CanDelete],
    }

    @property
    def service(self) -> ProductService:
        return apps.get_app_config("products").service

    def get_permissions(self):
        return [guard() for guard in self.guards.get(self.action, [HasApiKey])]

    def get_renderer_context(self):
        context = super().get_renderer_context()
        context["document"] = PRODUCT_LIST if self.action == "list" else PRODUCT
        return context

    @staticmethod
    def _payload(request: Request):
        data = request.data
        if not hasattr(data, "get"):
            raise MalformedDocumentError("Request body must be an object")
        return data

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /products?page=&limit="""
        page = self.service.list_products(
            request.query_params.get("page"),
            request.query_params.get("limit"),
        )
        return Response(
            {
                "page": page.page,
                "limit": page.limit,
                "total": page.total,
                "data": [product.to_document() for product in page.items],
            }
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /products/{pk}"""
        product = self.service.get_product(pk)
        return Response(product.to_document())

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /products"""
        product = self.service.create_product(self._payload(request))
        return Response(product.to_document(), status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /products/{pk}"""
        product = self.service.update_product(pk, self._payload(request))
        return Response(product.to_document())

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /products/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /products/{pk}"""
        self.service.delete_product(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
