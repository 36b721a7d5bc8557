"""DRF renderers delegating to the product codec.

Views name the document they return through ``renderer_context["document"]``
(``product``, ``product_list`` or ``token``); responses produced by the
exception handler are always rendered as error documents.
"""

from __future__ import annotations

from rest_framework.renderers import BaseRenderer

from modules.core.negotiation import Format
from modules.products import codec

PRODUCT = "product"
PRODUCT_LIST = "product_list"
TOKEN = "token"


class CodecRenderer(BaseRenderer):
    format = Format.JSON.value

    def render(self, data, accepted_media_type=None, renderer_context=None):
        if data is None:
            return b""
        fmt = Format(self.format)
        context = renderer_context or {}
        response = context.get("response")

        if response is not None and getattr(response, "exception", False):
            return codec.encode_error(
                data["status"], data["error"], data["path"], fmt, timestamp=data["timestamp"]
            )

        document = context.get("document", PRODUCT)
        if document == PRODUCT_LIST:
            return codec.encode_list(
                data["page"], data["limit"], data["total"], data["data"], fmt
            )
        if document == TOKEN:
            return codec.encode_token(data["token"], fmt)
        return codec.encode(data, fmt)


class ProductJSONRenderer(CodecRenderer):
    media_type = "application/json"
    format = Format.JSON.value
    charset = None


class ProductXMLRenderer(CodecRenderer):
    media_type = "application/xml"
    format = Format.XML.value
    charset = "utf-8"
