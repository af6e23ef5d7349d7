"""
Application-wide constants for digidoc.

Wire-level names, document format identifiers, timeouts and size limits
are centralized here.
"""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("digidoc")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "BYTES_PER_MB",
    "CONTENT_TYPE_EMBEDDED",
    "DEFAULT_MIME_TYPE",
    "DEFAULT_TIMEOUT_SOAP",
    "DOC_FORMAT",
    "DOC_VERSION",
    "ENV_PROFILE",
    "ENV_TIMEOUT",
    "ENV_URL",
    "MAX_RESPONSE_SIZE",
    "MAX_TIMEOUT",
    "MIN_TIMEOUT",
    "RECV_BUFFER_SIZE",
    "SERVICE_NAMESPACE",
    "XML_PREVIEW_LENGTH",
    "__version__",
]

# ── Document format ───────────────────────────────────────────────────

# Container format and version passed to CreateSignedDoc
DOC_FORMAT = "BDOC"
DOC_VERSION = "2.1"

# AddDataFile content type; file content always travels inline
CONTENT_TYPE_EMBEDDED = "EMBEDDED_BASE64"

# Used when the MIME type of a local file cannot be guessed
DEFAULT_MIME_TYPE = "application/octet-stream"


# ── Protocol ──────────────────────────────────────────────────────────

# XML namespace of the DigiDocService operations
SERVICE_NAMESPACE = "http://www.sk.ee/DigiDocService/DigiDocService_2_3.wsdl"

# XML preview truncation length for error messages (characters)
XML_PREVIEW_LENGTH = 300


# ── Timeout values (seconds) ──────────────────────────────────────────

DEFAULT_TIMEOUT_SOAP = 60

MIN_TIMEOUT = 1
MAX_TIMEOUT = 3600


# ── Size limits (bytes) ───────────────────────────────────────────────

BYTES_PER_MB = 1024 * 1024

# Maximum SOAP response body size (100 MB); GetSignedDoc carries whole containers
MAX_RESPONSE_SIZE = 100 * 1024 * 1024

RECV_BUFFER_SIZE = 8192


# ── Environment variable names ────────────────────────────────────────

ENV_URL = "DIGIDOC_URL"
ENV_TIMEOUT = "DIGIDOC_TIMEOUT"
ENV_PROFILE = "DIGIDOC_PROFILE"
