"""
Remote call gateway abstraction.

The Api depends on this protocol, not on the SOAP implementation, so tests
and alternative transports can stand in for the real service.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol


class RemoteGateway(Protocol):
    """Protocol for issuing named remote procedure calls."""

    def call(self, method: str, args: Sequence[object]) -> dict[str, Any]:
        """
        Invoke a remote procedure with positional arguments.

        Args:
            method: Wire name of the procedure (e.g. ``"StartSession"``).
            args: Positional arguments in wire order.

        Returns:
            The response parts keyed by element name.  Nested structures are
            dicts; repeated elements are lists; empty elements are None.

        Raises:
            ServiceError: If the service reported a fault.
            TransportError: On connection, TLS or HTTP failures.
        """
        ...
