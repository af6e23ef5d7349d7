"""
Local proxies for remote DigiDocService resources.

Every entity carries a surrogate ``key`` used by the change tracker.  Keys
survive :meth:`~digidoc.core.container.Container.to_dict` round trips, so a
container restored in another process can be merged back into a new Api.
"""

from __future__ import annotations

__all__ = ["Certificate", "File", "Session"]

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..constants import DEFAULT_MIME_TYPE
from .cert_info import certificate_to_hex
from .tracker import new_key


@dataclass(frozen=True)
class Session:
    """Server-side working context, identified by its ``Sesscode``."""

    id: int | str


@dataclass(eq=False)
class File:
    """A data file in the container.

    ``id`` is assigned by the service once the file is uploaded (or read
    back from an opened container).  A file without an id has never been
    synchronized.

    Attributes:
        name: File name shown inside the container.
        mime_type: MIME type declared to the service.
        size: Size of the content in bytes.
        pathname: Local source of the content; None for files that only
            exist remotely (reconstructed from an opened container).
        id: Remote data file id (``D0``, ``D1``, ...).
        key: Surrogate tracker key.
    """

    name: str
    mime_type: str = DEFAULT_MIME_TYPE
    size: int = 0
    pathname: str | None = None
    id: str | None = None
    key: str = field(default_factory=new_key)

    @classmethod
    def from_path(cls, pathname: str | Path, mime_type: str | None = None) -> File:
        """Build an unsynchronized file from local content."""
        path = Path(pathname)
        if mime_type is None:
            guessed, _ = mimetypes.guess_type(path.name)
            mime_type = guessed or DEFAULT_MIME_TYPE
        return cls(
            name=path.name,
            mime_type=mime_type,
            size=path.stat().st_size,
            pathname=str(path),
        )

    @classmethod
    def from_descriptor(cls, descriptor: dict[str, Any]) -> File:
        """Rebuild a file from a remote ``DataFileInfo`` descriptor."""
        size = descriptor.get("Size")
        return cls(
            name=descriptor.get("Filename") or "",
            mime_type=descriptor.get("MimeType") or DEFAULT_MIME_TYPE,
            size=int(size) if size not in (None, "") else 0,
            id=descriptor.get("Id"),
        )

    @property
    def is_uploaded(self) -> bool:
        return self.id is not None


@dataclass(frozen=True)
class Certificate:
    """Signer identity handed to PrepareSignature.

    Attributes:
        id: Signer's token id (the certificate's id on the signing device).
        signature: Signer's certificate as hex-encoded DER.
    """

    id: str
    signature: str

    @classmethod
    def from_x509(cls, data: bytes | str, token_id: str) -> Certificate:
        """Build from a DER or PEM certificate read from a signing device."""
        return cls(id=token_id, signature=certificate_to_hex(data))
