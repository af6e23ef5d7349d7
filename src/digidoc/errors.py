"""digidoc error types."""

from __future__ import annotations

from typing import Any

__all__ = [
    "ApiError",
    "CertificateError",
    "ConfigError",
    "DigiDocError",
    "EncodingError",
    "NotFoundError",
    "PreconditionError",
    "ServiceError",
    "SignatureStateError",
    "TransportError",
]


class DigiDocError(Exception):
    """Base error for digidoc operations."""


class ApiError(DigiDocError):
    """Error raised by an :class:`~digidoc.api.Api` operation."""


class ServiceError(ApiError):
    """A remote call failed.

    Args:
        message: Human-readable error description.
        code: Fault code reported by the service, if any.
    """

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def __reduce__(self) -> tuple[Any, ...]:
        """Preserve the fault code across pickle/unpickle."""
        return (type(self), (self.message,), {"code": self.code})

    def __setstate__(self, state: dict[str, Any] | None) -> None:
        if state is None:
            return
        for key, value in state.items():
            setattr(self, key, value)


class TransportError(ServiceError):
    """Connection, TLS or HTTP failure while talking to the service.

    Args:
        message: Human-readable error description.
        retryable: Whether the failure is transient (timeouts, resets).
            digidoc never retries by itself; the flag is for callers.
    """

    def __init__(self, message: str, *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.message,), {"retryable": self.retryable})


class PreconditionError(ApiError):
    """Operation attempted on a container this Api does not track."""

    @classmethod
    def not_tracked(cls, container: object) -> PreconditionError:
        return cls(f"DigiDoc container must be merged with Api (got {container!r}).")


class NotFoundError(ApiError):
    """A remote descriptor list has no entry with the requested id."""


class SignatureStateError(DigiDocError):
    """Illegal signature state transition (programming error)."""


class ConfigError(DigiDocError):
    """Configuration validation error."""


class CertificateError(DigiDocError):
    """Certificate parsing or extraction error."""


class EncodingError(DigiDocError):
    """Local content could not be read or remote content could not be decoded."""
