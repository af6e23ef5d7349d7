"""
Container: the aggregate the Api synchronizes.

A container holds exactly one session plus ordered files and signatures.
It can be stored between requests (web session, database row, ...) with
:meth:`Container.to_dict` and restored with :meth:`Container.from_dict`;
the restored container must then be passed to ``Api.merge()``.
"""

from __future__ import annotations

__all__ = ["Container"]

from dataclasses import dataclass, field
from typing import Any

from .collections import FileCollection, SignatureCollection
from .entities import File, Session
from .signature import Signature
from .tracker import new_key


@dataclass(eq=False)
class Container:
    session: Session
    files: FileCollection = field(default_factory=FileCollection)
    signatures: SignatureCollection = field(default_factory=SignatureCollection)
    key: str = field(default_factory=new_key)

    def add_file(self, file: File) -> File:
        self.files.add(file)
        return file

    def add_signature(self, signature: Signature) -> Signature:
        self.signatures.add(signature)
        return signature

    # ── Persisted state ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict (session id, keys, descriptors)."""
        return {
            "key": self.key,
            "session": self.session.id,
            "files": [
                {
                    "key": f.key,
                    "id": f.id,
                    "name": f.name,
                    "mime_type": f.mime_type,
                    "size": f.size,
                    "pathname": f.pathname,
                }
                for f in self.files
            ],
            "signatures": [s.to_dict() for s in self.signatures],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Container:
        """Rebuild a container serialized with :meth:`to_dict`."""
        files = FileCollection(
            File(
                name=f["name"],
                mime_type=f["mime_type"],
                size=f["size"],
                pathname=f.get("pathname"),
                id=f.get("id"),
                key=f["key"],
            )
            for f in data.get("files", [])
        )
        signatures = SignatureCollection(Signature.from_dict(s) for s in data.get("signatures", []))
        return cls(Session(data["session"]), files, signatures, key=data["key"])
