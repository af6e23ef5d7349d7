"""Network transport and SOAP protocol layer."""

from __future__ import annotations

from .protocol import RemoteGateway
from .soap_gateway import SoapGateway

__all__ = ["RemoteGateway", "SoapGateway"]
