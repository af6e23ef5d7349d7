# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""
Signer certificate helpers.

The service wants the signer's X.509 certificate as a hex string of its DER
encoding.  Signing devices and browser plugins hand certificates out in
several shapes (DER, PEM, PEM body without the BEGIN/END lines); everything
is funnelled through :func:`load_certificate`.
"""

from __future__ import annotations

__all__ = [
    "certificate_to_hex",
    "extract_cert_info_from_x509",
    "get_issuer_common_name",
    "load_certificate",
]

import binascii
import datetime
import logging

from asn1crypto import pem as asn1_pem
from asn1crypto import x509 as asn1_x509

from ..errors import CertificateError

_logger = logging.getLogger(__name__)

# OIDs for common subject fields
_OID_CN = "2.5.4.3"
_OID_EMAIL = "1.2.840.113549.1.9.1"
_OID_ORG = "2.5.4.10"
_OID_SERIAL = "2.5.4.5"

_PEM_HEADER = b"-----BEGIN CERTIFICATE-----\n"
_PEM_FOOTER = b"-----END CERTIFICATE-----\n"


def _to_der(data: bytes | str) -> bytes:
    """Convert DER, PEM or a bare PEM body to DER bytes."""
    raw = data.encode("ascii") if isinstance(data, str) else data

    # DER always starts with a SEQUENCE tag
    if raw[:1] == b"\x30":
        return raw

    stripped = raw.strip()
    if not stripped:
        raise CertificateError("Empty certificate data.")

    if not asn1_pem.detect(stripped):
        stripped = _PEM_HEADER + stripped + b"\n" + _PEM_FOOTER

    try:
        _, _, der = asn1_pem.unarmor(stripped)
    except (ValueError, TypeError, binascii.Error) as e:
        raise CertificateError(f"Failed to decode PEM certificate: {e}") from e
    return der


def load_certificate(data: bytes | str) -> asn1_x509.Certificate:
    """
    Parse an X.509 certificate.

    Args:
        data: DER bytes, PEM text, or a PEM body missing its
            ``BEGIN CERTIFICATE`` / ``END CERTIFICATE`` lines.

    Returns:
        Parsed asn1crypto certificate.

    Raises:
        CertificateError: If the data is not a certificate.
    """
    der = _to_der(data)
    try:
        cert = asn1_x509.Certificate.load(der)
        # Force a full parse so malformed data fails here, not later
        _ = cert.subject.native
    except (ValueError, TypeError, OSError) as e:
        raise CertificateError(f"Failed to parse X.509 certificate: {e}") from e
    return cert


def _extract_info_from_cert_object(cert: asn1_x509.Certificate) -> dict[str, str | None]:
    """Extract CN, serial number, email, org, dn from a certificate object.

    Also logs warnings for expired or not-yet-valid certificates.
    """
    try:
        not_before = cert.not_valid_before
        not_after = cert.not_valid_after
        now = datetime.datetime.now(datetime.timezone.utc)
        if not_before and now < not_before:
            _logger.warning("Certificate is not yet valid (notBefore: %s)", not_before)
        elif not_after and now > not_after:
            _logger.warning("Certificate has expired (notAfter: %s)", not_after)
    except (KeyError, TypeError, ValueError) as e:
        _logger.debug("Cannot check certificate validity dates: %s", e)

    fields: dict[str, str | None] = {
        "name": None,
        "serial_number": None,
        "email": None,
        "organization": None,
    }
    oid_map = {
        _OID_CN: "name",
        _OID_SERIAL: "serial_number",
        _OID_EMAIL: "email",
        _OID_ORG: "organization",
    }

    for rdn in cert.subject.chosen:
        for attr in rdn:
            oid = attr["type"].dotted
            if oid in oid_map:
                fields[oid_map[oid]] = attr["value"].native

    fields["dn"] = cert.subject.human_friendly
    return fields


def extract_cert_info_from_x509(data: bytes | str) -> dict[str, str | None]:
    """
    Extract signer info from an X.509 certificate.

    Returns:
        dict with keys: name (CN), serial_number, email, organization,
        dn (full subject).

    Raises:
        CertificateError: If parsing fails.
    """
    return _extract_info_from_cert_object(load_certificate(data))


def get_issuer_common_name(data: bytes | str) -> str | None:
    """Return the issuer's Common Name, or None if the issuer has none."""
    cert = load_certificate(data)
    for rdn in cert.issuer.chosen:
        for attr in rdn:
            if attr["type"].dotted == _OID_CN:
                return attr["value"].native
    return None


def certificate_to_hex(data: bytes | str) -> str:
    """Return the DER encoding of a certificate as an uppercase hex string."""
    return load_certificate(data).dump().hex().upper()

