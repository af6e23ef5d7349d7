"""
digidoc -- Python client for the DigiDocService signing service.

Creates, opens, signs and downloads BDOC containers through the
DigiDocService SOAP API, keeping a local container model in sync with the
remote session.
"""

from __future__ import annotations

from .api import Api, connect
from .constants import __version__
from .core import (
    Certificate,
    Container,
    File,
    Session,
    Signature,
    SignatureState,
    SignedDocInfo,
    Tracker,
)
from .encoder import Encoder
from .errors import (
    ApiError,
    CertificateError,
    ConfigError,
    DigiDocError,
    EncodingError,
    NotFoundError,
    PreconditionError,
    ServiceError,
    SignatureStateError,
    TransportError,
)
from .network import SoapGateway

__all__ = [
    "Api",
    "ApiError",
    "Certificate",
    "CertificateError",
    "ConfigError",
    "Container",
    "DigiDocError",
    "Encoder",
    "EncodingError",
    "File",
    "NotFoundError",
    "PreconditionError",
    "ServiceError",
    "Session",
    "Signature",
    "SignatureState",
    "SignatureStateError",
    "SignedDocInfo",
    "SoapGateway",
    "Tracker",
    "TransportError",
    "__version__",
    "connect",
]
