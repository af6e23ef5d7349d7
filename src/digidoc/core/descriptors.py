"""
Remote document descriptors.

The service returns ``DataFileInfo`` / ``SignatureInfo`` as a missing
element, a single element or a list of elements depending on how many
entries the document holds.  :func:`as_list` flattens all three shapes
here, once, so nothing downstream branches on shape.
"""

from __future__ import annotations

__all__ = ["SignedDocInfo", "as_list", "find_by_id"]

from dataclasses import dataclass, field
from typing import Any

from ..errors import NotFoundError


def as_list(value: Any) -> list[dict[str, Any]]:
    """Normalize an absent, single or repeated descriptor to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return [value]


def find_by_id(descriptors: list[dict[str, Any]], descriptor_id: str) -> dict[str, Any]:
    """Return the descriptor with the given ``Id``.

    Raises:
        NotFoundError: If no descriptor has that id.
    """
    for descriptor in descriptors:
        if descriptor.get("Id") == descriptor_id:
            return descriptor
    raise NotFoundError(f'No remote object with id "{descriptor_id}" was found.')


@dataclass
class SignedDocInfo:
    """Normalized ``SignedDocInfo`` structure."""

    format: str | None = None
    version: str | None = None
    data_files: list[dict[str, Any]] = field(default_factory=list)
    signatures: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_result(cls, info: dict[str, Any] | None) -> SignedDocInfo:
        if not info:
            return cls()
        return cls(
            format=info.get("format"),
            version=info.get("version"),
            data_files=as_list(info.get("DataFileInfo")),
            signatures=as_list(info.get("SignatureInfo")),
        )

    def get_data_file(self, file_id: str) -> dict[str, Any]:
        return find_by_id(self.data_files, file_id)

    def get_signature(self, signature_id: str) -> dict[str, Any]:
        return find_by_id(self.signatures, signature_id)
