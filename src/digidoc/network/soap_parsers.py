"""SOAP response parsing and fault translation for DigiDocService."""

from __future__ import annotations

import logging
import re
from typing import Any
from xml.etree.ElementTree import Element
from xml.etree.ElementTree import ParseError as _XMLParseError

import defusedxml.ElementTree as ET

from ..constants import XML_PREVIEW_LENGTH
from ..errors import ServiceError

_logger = logging.getLogger(__name__)

_XSI_NIL = "{http://www.w3.org/2001/XMLSchema-instance}nil"

# Document payloads are large and may be sensitive; keep them out of error messages
_REDACT_PAYLOAD_PATTERN = r"<(\w+:)?(SignedDocData|Content|SigDocXML)>[^<]*</(\w+:)?\2>"
_REDACT_PAYLOAD_REPLACEMENT = r"<\2>[REDACTED]</\2>"


def _strip_namespace(tag: str) -> str:
    """Strip XML namespace prefix from a tag name."""
    return tag.split("}")[-1] if "}" in tag else tag


def _redact_and_truncate_xml(xml_str: str) -> str:
    """Redact document payloads from XML and truncate to preview length."""
    redacted = re.sub(_REDACT_PAYLOAD_PATTERN, _REDACT_PAYLOAD_REPLACEMENT, xml_str)
    return redacted[:XML_PREVIEW_LENGTH]


def element_to_value(elem: Element) -> Any:
    """
    Convert a response element into plain Python values.

    Leaf elements become their stripped text (None when empty or nil).
    Elements with children become dicts keyed by child tag; a tag that
    occurs more than once becomes a list in document order.
    """
    children = list(elem)
    if not children:
        if elem.get(_XSI_NIL) in ("true", "1"):
            return None
        text = (elem.text or "").strip()
        return text or None

    result: dict[str, Any] = {}
    for child in children:
        tag = _strip_namespace(child.tag)
        value = element_to_value(child)
        if tag not in result:
            result[tag] = value
        elif isinstance(result[tag], list):
            result[tag].append(value)
        else:
            result[tag] = [result[tag], value]
    return result


def _parse_fault(fault: Element) -> ServiceError:
    """Build a ServiceError from a SOAP Fault element.

    DigiDocService puts its numeric error code in ``faultstring`` and the
    human-readable text in ``detail/message``.
    """
    fault_code = None
    fault_string = None
    detail_message = None
    for elem in fault.iter():
        tag = _strip_namespace(elem.tag)
        text = (elem.text or "").strip()
        if tag == "faultcode" and text:
            fault_code = text
        elif tag == "faultstring" and text:
            fault_string = text
        elif tag == "message" and text:
            detail_message = text

    code = fault_string or fault_code
    message = detail_message or fault_string or fault_code or "Unknown fault"
    return ServiceError(message, code=code)


def parse_response(xml_str: str, method: str) -> dict[str, Any]:
    """
    Parse a DigiDocService SOAP response.

    Returns:
        The response parts keyed by element name (see element_to_value).

    Raises:
        ServiceError: If the response is a fault or cannot be parsed.
    """
    try:
        root = ET.fromstring(xml_str)
    except _XMLParseError as e:
        _logger.exception("Invalid XML in %s response", method)
        safe_preview = _redact_and_truncate_xml(xml_str[:500])
        raise ServiceError(f"Invalid XML response: {e}\nRaw: {safe_preview}") from e

    body = next((el for el in root.iter() if _strip_namespace(el.tag) == "Body"), None)
    payload = next(iter(body), None) if body is not None else None
    if payload is None:
        raise ServiceError(f"{method} response has no SOAP body.")

    if _strip_namespace(payload.tag) == "Fault":
        error = _parse_fault(payload)
        _logger.error("%s failed: %s", method, error)
        raise error

    value = element_to_value(payload)
    result: dict[str, Any] = value if isinstance(value, dict) else {}
    _logger.debug("Parsed %s response: parts=%s", method, sorted(result))
    return result
