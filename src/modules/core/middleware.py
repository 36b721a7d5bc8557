import re
import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

# Incoming IDs end up in headers and logs: short opaque tokens only.
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._:-]{1,128}")

logger = structlog.get_logger(__name__)


def resolve_request_id(supplied: str | None) -> str:
    """Return ``supplied`` if it is a usable ID, else a fresh UUID4."""
    if supplied and _REQUEST_ID_RE.fullmatch(supplied):
        return supplied
    return str(uuid.uuid4())


class CorrelationIdMiddleware:
    """Tag every log line of a request with a correlation ID.

    The ID comes from ``X-Request-ID`` when the client sends a well-formed
    one.  It is bound into structlog's context variables for the duration
    of the request and returned on the response, including error responses
    produced by the 404/500 handlers.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        path = request.get_full_path()
        started = time.monotonic()
        logger.info("request_started", method=request.method, path=path)

        response = self.get_response(request)

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "request_finished",
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )

        response[REQUEST_ID_HEADER] = cid
        return response
