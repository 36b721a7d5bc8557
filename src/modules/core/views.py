import time
from typing import Any, Dict

import structlog
from django.apps import apps
from django.http import HttpRequest, HttpResponse, JsonResponse

from modules.core.exceptions import CatalogError
from modules.core.negotiation import Format, negotiate_format
from modules.core.timestamps import now_iso
from modules.products import codec

logger = structlog.get_logger()

CONTENT_TYPES = {
    Format.JSON: "application/json",
    Format.XML: "application/xml; charset=utf-8",
}


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    # Check product storage
    try:
        start = time.monotonic()
        collection = apps.get_app_config("products").repository.load()
        services["storage"] = {
            "status": "up",
            "shape": collection.shape.value,
            "products": len(collection),
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        }
    except CatalogError:
        services["storage"] = {"status": "down"}
        overall_healthy = False
        logger.error("health_check_storage_failure")

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check_completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "timestamp": now_iso(),
            "services": services,
        },
        status=status_code,
    )


def _error_response(request: HttpRequest, status: int, message: str) -> HttpResponse:
    fmt = negotiate_format(request.META.get("HTTP_ACCEPT"))
    body = codec.encode_error(status, message, request.get_full_path(), fmt)
    return HttpResponse(body, status=status, content_type=CONTENT_TYPES[fmt])


def not_found(request: HttpRequest, exception=None) -> HttpResponse:
    """``handler404`` for paths no route matches."""
    return _error_response(request, 404, "Not found")


def server_error(request: HttpRequest) -> HttpResponse:
    """``handler500`` for failures raised outside DRF views."""
    logger.error("request.unhandled_error", path=request.get_full_path())
    return _error_response(request, 500, "Internal server error")
