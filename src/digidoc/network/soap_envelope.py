"""SOAP envelope builders for DigiDocService requests."""

from __future__ import annotations

from collections.abc import Sequence
from xml.sax.saxutils import escape as _xml_escape

from ..constants import SERVICE_NAMESPACE

# Parameter names of each operation, in wire order.  Trailing parameters
# may be omitted by callers.
OPERATION_PARAMETERS: dict[str, tuple[str, ...]] = {
    "StartSession": ("SigningProfile", "SigDocXML", "bHoldSession", "datafile"),
    "CreateSignedDoc": ("Sesscode", "Format", "Version", "SigningProfile"),
    "CloseSession": ("Sesscode",),
    "AddDataFile": (
        "Sesscode",
        "FileName",
        "MimeType",
        "ContentType",
        "Size",
        "DigestType",
        "DigestValue",
        "Content",
    ),
    "PrepareSignature": (
        "Sesscode",
        "SignersCertificate",
        "SignersTokenId",
        "Role",
        "City",
        "State",
        "PostalCode",
        "Country",
        "SigningProfile",
    ),
    "FinalizeSignature": ("Sesscode", "SignatureId", "SignatureValue"),
    "GetSignedDoc": ("Sesscode",),
    "GetSignedDocInfo": ("Sesscode",),
}


def xml_escape(s: str) -> str:
    """Escape XML special characters in user input."""
    return _xml_escape(s, {'"': "&quot;", "'": "&apos;"})


def _format_value(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return xml_escape(str(value))


def build_call_envelope(method: str, args: Sequence[object]) -> str:
    """
    Build the SOAP envelope for one DigiDocService call.

    All argument values are XML-escaped internally.

    Args:
        method: Operation name, a key of OPERATION_PARAMETERS.
        args: Positional arguments in wire order.

    Returns:
        Complete SOAP envelope as string.

    Raises:
        ValueError: If the operation is unknown.
        TypeError: If more arguments are given than the operation takes.
    """
    try:
        names = OPERATION_PARAMETERS[method]
    except KeyError:
        raise ValueError(f"Unknown DigiDocService operation: {method}") from None
    if len(args) > len(names):
        raise TypeError(f"{method} takes at most {len(names)} arguments, got {len(args)}")

    params = "\n      ".join(
        f"<{name}>{_format_value(value)}</{name}>" for name, value in zip(names, args)
    )
    return f"""\
<?xml version="1.0" encoding="utf-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/"
                  xmlns:d="{SERVICE_NAMESPACE}">
  <soapenv:Body>
    <d:{method}>
      {params}
    </d:{method}>
  </soapenv:Body>
</soapenv:Envelope>"""
