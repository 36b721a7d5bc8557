"""Login endpoint."""

from __future__ import annotations

from django.apps import apps
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.exceptions import MalformedDocumentError
from modules.core.permissions import HasApiKey
from modules.products.renderers import TOKEN


class LoginView(APIView):
    """POST /auth/login

    Requires the API key; exchanges ``{username, password}`` for a bearer
    token.
    """

    permission_classes = [HasApiKey]
    document = TOKEN

    def get_renderer_context(self):
        context = super().get_renderer_context()
        context["document"] = self.document
        return context

    def post(self, request: Request) -> Response:
        data = request.data
        if not hasattr(data, "get"):
            raise MalformedDocumentError("Request body must be an object")

        service = apps.get_app_config("accounts").auth_service
        token = service.login(data.get("username"), data.get("password"))
        return Response({"status": "success", "token": token})
