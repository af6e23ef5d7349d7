"""Base64 codec for file content sent to and received from the service."""

from __future__ import annotations

__all__ = ["Encoder"]

import base64
import binascii
import logging
from pathlib import Path

from .errors import EncodingError

_logger = logging.getLogger(__name__)


class Encoder:
    """Encodes local files for upload and decodes downloaded documents."""

    def encode_file_content(self, pathname: str | Path) -> str:
        """Read a local file and return its content as base64 text."""
        path = Path(pathname)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise EncodingError(f"Cannot read {path}: {e}") from e
        _logger.debug("Encoding %s: %d bytes", path, len(data))
        return self.encode(data)

    def encode(self, data: bytes) -> str:
        return base64.b64encode(data).decode("ascii")

    def decode(self, data: str | bytes) -> bytes:
        """Decode base64 content returned by the service.

        Whitespace (line breaks inserted by the service) is ignored.
        """
        if isinstance(data, str):
            data = data.encode("ascii", errors="replace")
        try:
            return base64.b64decode(b"".join(data.split()), validate=True)
        except binascii.Error as e:
            raise EncodingError(f"Invalid Base64 in server response: {e}") from e
