"""Content negotiation between JSON and XML.

``negotiate_format`` is a pure function of the ``Accept`` header; the DRF
negotiation class only maps its result onto a renderer.  JSON is always the
fallback, so negotiation never fails with 406.
"""

from __future__ import annotations

from enum import Enum

from rest_framework.negotiation import DefaultContentNegotiation

XML_MEDIA_TYPES = ("application/xml", "text/xml")


class Format(str, Enum):
    JSON = "json"
    XML = "xml"


def negotiate_format(accept: str | None) -> Format:
    """Return ``Format.XML`` if ``accept`` names any XML media type."""
    if not accept:
        return Format.JSON
    for part in accept.lower().split(","):
        media_type = part.split(";", 1)[0].strip()
        if media_type in XML_MEDIA_TYPES or media_type.endswith("+xml"):
            return Format.XML
    return Format.JSON


class AcceptHeaderNegotiation(DefaultContentNegotiation):
    """Pick the renderer whose ``format`` matches ``negotiate_format``.

    Parser selection (by ``Content-Type``) is inherited unchanged.
    """

    def select_renderer(self, request, renderers, format_suffix=None):
        wanted = negotiate_format(request.META.get("HTTP_ACCEPT"))
        for renderer in renderers:
            if renderer.format == wanted.value:
                return renderer, renderer.media_type
        fallback = renderers[0]
        return fallback, fallback.media_type
