"""Container model and change tracking."""

from __future__ import annotations

from .cert_info import (
    certificate_to_hex,
    extract_cert_info_from_x509,
    get_issuer_common_name,
    load_certificate,
)
from .collections import FileCollection, SignatureCollection
from .container import Container
from .descriptors import SignedDocInfo, as_list, find_by_id
from .entities import Certificate, File, Session
from .signature import Signature, SignatureState
from .tracker import Tracker

__all__ = [
    "Certificate",
    "Container",
    "File",
    "FileCollection",
    "Session",
    "Signature",
    "SignatureCollection",
    "SignatureState",
    "SignedDocInfo",
    "Tracker",
    "as_list",
    "certificate_to_hex",
    "extract_cert_info_from_x509",
    "find_by_id",
    "get_issuer_common_name",
    "load_certificate",
]
