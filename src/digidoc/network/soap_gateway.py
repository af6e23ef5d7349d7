"""
SOAP-based remote call gateway.

Implements the RemoteGateway protocol for DigiDocService endpoints.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..constants import DEFAULT_TIMEOUT_SOAP
from .soap import build_call_envelope, parse_response, send_soap

_logger = logging.getLogger(__name__)


class SoapGateway:
    """SOAP implementation of the RemoteGateway protocol."""

    def __init__(self, url: str, timeout: int = DEFAULT_TIMEOUT_SOAP) -> None:
        """
        Initialize SOAP gateway.

        Args:
            url: DigiDocService endpoint URL (e.g. https://tsp.demo.sk.ee/).
            timeout: Per-call HTTP timeout in seconds.
        """
        self.url = url
        self.timeout = timeout

    def call(self, method: str, args: Sequence[object]) -> dict[str, Any]:
        """Issue one DigiDocService operation and return its response parts."""
        envelope = build_call_envelope(method, args)
        _logger.debug("Calling %s on %s (%d args)", method, self.url, len(args))
        response = send_soap(self.url, envelope, action=method, timeout=self.timeout)
        return parse_response(response, method)

    def __repr__(self) -> str:
        return f"SoapGateway({self.url!r}, timeout={self.timeout})"
