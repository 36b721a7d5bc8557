"""Single error-formatting stage for the API.

``catalog_exception_handler`` is installed as DRF's ``EXCEPTION_HANDLER``
and receives every exception raised by guards, parsers, views and
services.  It always returns a response, so nothing escapes unformatted;
the negotiated renderer turns the error document into JSON or XML.

Unexpected exceptions become a generic 500: the message never exposes
internal details and the traceback goes to the log only.
"""

from __future__ import annotations

import structlog
from django.http import Http404
from rest_framework.exceptions import APIException
from rest_framework.response import Response

from modules.core.exceptions import AuthenticationError, CatalogError
from modules.products.codec import error_document

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _detail_message(detail) -> str:
    if isinstance(detail, dict):
        return "; ".join(f"{key}: {_detail_message(value)}" for key, value in detail.items())
    if isinstance(detail, list):
        return "; ".join(_detail_message(item) for item in detail)
    return str(detail)


def resolve_error(exc: Exception) -> tuple[int, str]:
    """Map any exception to ``(status, message)``."""
    if isinstance(exc, CatalogError):
        return exc.status_code, exc.message
    if isinstance(exc, Http404):
        return 404, "Not found"
    if isinstance(exc, APIException):
        return exc.status_code, _detail_message(exc.detail)
    return 500, INTERNAL_ERROR_MESSAGE


def catalog_exception_handler(exc, context):
    request = context.get("request")
    path = request.get_full_path() if request is not None else ""
    status, message = resolve_error(exc)

    if status >= 500:
        logger.exception("request.failed", path=path, status=status)
    else:
        logger.info("request.rejected", path=path, status=status, error=message)

    response = Response(error_document(status, message, path), status=status)
    if isinstance(exc, AuthenticationError):
        response["WWW-Authenticate"] = 'Bearer realm="api"'
    return response
