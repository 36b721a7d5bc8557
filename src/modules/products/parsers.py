"""DRF parsers delegating to the product codec.

Malformed bodies raise ``MalformedDocumentError`` (400) rather than
producing empty or default fields.
"""

from __future__ import annotations

from django.conf import settings
from rest_framework.parsers import BaseParser

from modules.core.exceptions import MalformedDocumentError
from modules.core.negotiation import Format
from modules.products import codec


class CodecParser(BaseParser):
    format = Format.JSON

    def parse(self, stream, media_type=None, parser_context=None):
        encoding = (parser_context or {}).get("encoding", settings.DEFAULT_CHARSET)
        try:
            body = stream.read()
        except OSError as exc:
            raise MalformedDocumentError("Could not read request body") from exc
        if self.format is Format.JSON:
            try:
                body = body.decode(encoding)
            except UnicodeDecodeError as exc:
                raise MalformedDocumentError("Malformed JSON document") from exc
        return codec.decode(body, self.format)


class ProductJSONParser(CodecParser):
    media_type = "application/json"
    format = Format.JSON


class ProductXMLParser(CodecParser):
    media_type = "application/xml"
    format = Format.XML


class ProductTextXMLParser(ProductXMLParser):
    media_type = "text/xml"
