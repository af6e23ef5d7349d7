"""
Signature proxy and its state machine.

A signature moves one way only::

    CREATED --prepare()--> PREPARED --seal()--> SEALED

``prepare()`` records the remote signature id and the challenge (the
``SignedInfoDigest`` the signing device must sign).  The caller then attaches
the device's answer as ``solution`` and the next ``Api.update()`` seals it.
"""

from __future__ import annotations

__all__ = ["Signature", "SignatureState"]

import enum
import logging
from dataclasses import dataclass, field
from typing import Any

from ..errors import SignatureStateError
from .entities import Certificate
from .tracker import new_key

_logger = logging.getLogger(__name__)


class SignatureState(str, enum.Enum):
    CREATED = "created"
    PREPARED = "prepared"
    SEALED = "sealed"


@dataclass(eq=False)
class Signature:
    """A signature in the container.

    Attributes:
        certificate: Signer identity; None for signatures read back from
            an opened container.
        id: Remote signature id (``S0``, ``S1``, ...), set by prepare().
        challenge: Digest to be signed by the signer's device.
        status: Validation status reported by the service, if known.
        signing_time: Signing time reported by the service, if known.
        signer: Signer's common name reported by the service, if known.
        key: Surrogate tracker key.
    """

    certificate: Certificate | None = None
    id: str | None = None
    challenge: str | None = None
    status: str | None = None
    signing_time: str | None = None
    signer: str | None = None
    state: SignatureState = SignatureState.CREATED
    key: str = field(default_factory=new_key)
    _solution: str | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_descriptor(cls, descriptor: dict[str, Any]) -> Signature:
        """Rebuild a finalized signature from a remote ``SignatureInfo`` descriptor."""
        signer = descriptor.get("Signer")
        signer_name = None
        if isinstance(signer, dict):
            signer_name = signer.get("CommonName")
        return cls(
            id=descriptor.get("Id"),
            status=descriptor.get("Status"),
            signing_time=descriptor.get("SigningTime"),
            signer=signer_name,
            state=SignatureState.SEALED,
        )

    def to_dict(self) -> dict[str, Any]:
        certificate = self.certificate
        return {
            "key": self.key,
            "id": self.id,
            "state": self.state.value,
            "challenge": self.challenge,
            "solution": self._solution,
            "certificate": (
                {"id": certificate.id, "signature": certificate.signature} if certificate else None
            ),
            "status": self.status,
            "signing_time": self.signing_time,
            "signer": self.signer,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Signature:
        """Rebuild a signature serialized with :meth:`to_dict`, in any state."""
        cert_data = data.get("certificate")
        signature = cls(
            certificate=Certificate(**cert_data) if cert_data else None,
            id=data.get("id"),
            challenge=data.get("challenge"),
            status=data.get("status"),
            signing_time=data.get("signing_time"),
            signer=data.get("signer"),
            state=SignatureState(data.get("state", SignatureState.CREATED.value)),
            key=data["key"],
        )
        # Restored as stored; the solution setter only accepts PREPARED
        signature._solution = data.get("solution")
        return signature

    # ── State transitions ─────────────────────────────────────────────

    def prepare(self, signature_id: str, challenge: str) -> None:
        if self.state is not SignatureState.CREATED:
            raise SignatureStateError(
                f"Cannot prepare signature {self.id!r} in state {self.state.value}."
            )
        self.id = signature_id
        self.challenge = challenge
        self.state = SignatureState.PREPARED
        _logger.debug("Signature %s prepared", signature_id)

    @property
    def solution(self) -> str | None:
        return self._solution

    @solution.setter
    def solution(self, value: str) -> None:
        if self.state is not SignatureState.PREPARED:
            raise SignatureStateError(
                f"Cannot attach a solution to signature {self.id!r} in state {self.state.value}."
            )
        self._solution = value

    def seal(self) -> None:
        if not self.is_sealable:
            raise SignatureStateError(
                f"Signature {self.id!r} is not sealable "
                f"(state={self.state.value}, has_solution={self._solution is not None})."
            )
        self.state = SignatureState.SEALED
        _logger.debug("Signature %s sealed", self.id)

    # ── Queries ───────────────────────────────────────────────────────

    @property
    def is_prepared(self) -> bool:
        return self.state is SignatureState.PREPARED

    @property
    def is_sealed(self) -> bool:
        return self.state is SignatureState.SEALED

    @property
    def is_sealable(self) -> bool:
        return self.state is SignatureState.PREPARED and self._solution is not None
