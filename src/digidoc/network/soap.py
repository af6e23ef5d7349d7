"""
SOAP transport and XML parsing for DigiDocService.

Re-exports the envelope builders and response parsers so callers only
need this module.
"""

from __future__ import annotations

import logging

from ..constants import DEFAULT_TIMEOUT_SOAP
from .soap_envelope import OPERATION_PARAMETERS, build_call_envelope, xml_escape
from .soap_parsers import element_to_value, parse_response
from .transport import http_post

_logger = logging.getLogger(__name__)

__all__ = [
    "OPERATION_PARAMETERS",
    "build_call_envelope",
    "element_to_value",
    "parse_response",
    "send_soap",
    "xml_escape",
]


def send_soap(url: str, envelope: str, action: str, timeout: int = DEFAULT_TIMEOUT_SOAP) -> str:
    """
    Send a SOAP request to a DigiDocService endpoint.

    Returns the response body as string.
    Raises TransportError on connection issues.
    """
    _logger.debug("SOAP request: action=%s, url=%s, timeout=%ds", action, url, timeout)
    headers = {
        "Content-Type": "text/xml; charset=utf-8",
        "SOAPAction": f'"{action}"',
    }
    body = envelope.encode("utf-8")
    _logger.debug("Request body: %d bytes", len(body))
    response = http_post(url, body, headers=headers, timeout=timeout)
    decoded = response.decode("utf-8", errors="replace")
    _logger.debug("SOAP response: %d bytes", len(decoded))
    return decoded
