"""Product entity codec: JSON and XML representations.

Encoding produces ``bytes`` ready to be sent; decoding produces a plain
``dict`` that the DTOs validate.  The XML vocabulary is fixed::

    <productDetail><product>...</product></productDetail>

    <productsResponse>
      <page/><limit/><total/>
      <products><product>...</product>...</products>
    </productsResponse>

    <error><status/><message/><path/><timestamp/></error>

    <login><status/><token/></login>

Product elements always appear in ``PRODUCT_FIELDS`` order.  XML input is
parsed with ``defusedxml`` so entity expansion and external DTDs are
rejected as malformed.
"""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional
from xml.etree.ElementTree import ParseError
from xml.sax.saxutils import escape

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring

from modules.core.exceptions import MalformedDocumentError
from modules.core.negotiation import Format
from modules.core.timestamps import now_iso
from modules.products.models import PRODUCT_FIELDS, XML_ILLEGAL_CHARS

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;", "\r": "&#13;"}
_INT_RE = re.compile(r"^[+-]?\d+$")
_NUMERIC_FIELDS = ("price", "stock")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode(product: Any, fmt: Format) -> bytes:
    """Encode a single product (``Product`` or mapping)."""
    document = _as_document(product)
    if fmt is Format.XML:
        return _xml(f"<productDetail>{_product_xml(document)}</productDetail>")
    return _json(document)


def encode_list(
    page: int, limit: int, total: int, items: Iterable[Any], fmt: Format
) -> bytes:
    documents = [_as_document(item) for item in items]
    if fmt is Format.XML:
        products = "".join(_product_xml(document) for document in documents)
        return _xml(
            "<productsResponse>"
            f"<page>{_text(page)}</page>"
            f"<limit>{_text(limit)}</limit>"
            f"<total>{_text(total)}</total>"
            f"<products>{products}</products>"
            "</productsResponse>"
        )
    return _json({"page": page, "limit": limit, "total": total, "data": documents})


def error_document(
    status: int, message: str, path: str, timestamp: Optional[str] = None
) -> Dict[str, Any]:
    """The structured error body shared by both formats."""
    return {
        "timestamp": timestamp or now_iso(),
        "path": path,
        "status": status,
        "error": message,
    }


def encode_error(
    status: int,
    message: str,
    path: str,
    fmt: Format,
    timestamp: Optional[str] = None,
) -> bytes:
    document = error_document(status, message, path, timestamp)
    if fmt is Format.XML:
        return _xml(
            "<error>"
            f"<status>{_text(document['status'])}</status>"
            f"<message>{_text(document['error'])}</message>"
            f"<path>{_text(document['path'])}</path>"
            f"<timestamp>{_text(document['timestamp'])}</timestamp>"
            "</error>"
        )
    return _json(document)


def encode_token(token: str, fmt: Format) -> bytes:
    if fmt is Format.XML:
        return _xml(
            f"<login><status>success</status><token>{_text(token)}</token></login>"
        )
    return _json({"status": "success", "token": token})


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode(body: bytes | str, fmt: Format) -> Dict[str, Any]:
    """Decode a request/response body into a product-like ``dict``.

    Raises:
        MalformedDocumentError: if the body is not a well-formed document
            or its top level is not an object / element with fields.
    """
    if fmt is Format.XML:
        return _decode_xml(body)
    return _decode_json(body)


def _decode_json(body: bytes | str) -> Dict[str, Any]:
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise MalformedDocumentError("Malformed JSON document") from exc
    if not isinstance(data, dict):
        raise MalformedDocumentError("Request body must be a JSON object")
    return data


def _decode_xml(body: bytes | str) -> Dict[str, Any]:
    try:
        root = fromstring(body)
    except (ParseError, DefusedXmlException, ValueError) as exc:
        raise MalformedDocumentError("Malformed XML document") from exc
    if root is None or root.tag == "parsererror":
        raise MalformedDocumentError("Malformed XML document")

    node = root
    if root.tag == "productDetail":
        node = root.find("product")
        if node is None:
            raise MalformedDocumentError("productDetail has no product element")

    fields: Dict[str, Any] = {}
    for child in node:
        if len(child):
            continue
        fields[child.tag] = child.text or ""
    for name in _NUMERIC_FIELDS:
        if name in fields:
            fields[name] = _number(fields[name])
    return fields


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _as_document(product: Any) -> Dict[str, Any]:
    if hasattr(product, "to_document"):
        return product.to_document()
    if isinstance(product, Mapping):
        return dict(product)
    raise TypeError(f"Cannot encode {type(product).__name__} as a product")


def _product_xml(document: Mapping[str, Any]) -> str:
    elements = "".join(
        f"<{name}>{_text(document.get(name))}</{name}>" for name in PRODUCT_FIELDS
    )
    return f"<product>{elements}</product>"


def _text(value: Any) -> str:
    """Escaped XML text; numbers in plain decimal form.

    Characters XML 1.0 cannot carry are dropped, so records stored before
    input validation still render as well-formed documents.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value):
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    return escape(XML_ILLEGAL_CHARS.sub("", str(value)), _XML_ENTITIES)


def _number(text: str) -> Any:
    stripped = text.strip()
    if _INT_RE.match(stripped):
        return int(stripped)
    try:
        return float(stripped)
    except ValueError:
        return text


def _xml(content: str) -> bytes:
    return f"{XML_DECLARATION}{content}".encode("utf-8")


def _json(document: Any) -> bytes:
    return json.dumps(document, ensure_ascii=False).encode("utf-8")
