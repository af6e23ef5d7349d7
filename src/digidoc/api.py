"""Session protocol orchestrator.

:class:`Api` keeps a local :class:`~digidoc.core.container.Container` in
step with a DigiDocService session.  It decides which local objects are new
(by asking its :class:`~digidoc.core.tracker.Tracker`), issues the remote
calls in the order the service requires, and records what is synchronized.

Typical flow::

    api = connect(profile="test")
    container = api.create()
    container.add_file(File.from_path("contract.pdf"))
    signature = container.add_signature(Signature(certificate))
    api.update(container)              # upload + prepare
    signature.solution = device.sign(signature.challenge)
    api.update(container)              # seal
    api.write(container, "contract.bdoc")
    api.close(container)

:func:`connect` resolves the endpoint from explicit arguments, a built-in
profile or the saved configuration.
"""

from __future__ import annotations

__all__ = ["Api", "connect"]

import contextlib
import http.client
import logging
import threading
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

from .config import get_service_config
from .config.profiles import ServiceProfile, get_profile, make_custom_profile
from .constants import CONTENT_TYPE_EMBEDDED, DEFAULT_TIMEOUT_SOAP, DOC_FORMAT, DOC_VERSION
from .core.container import Container
from .core.descriptors import SignedDocInfo
from .core.entities import File, Session
from .core.signature import Signature
from .core.tracker import Tracker
from .encoder import Encoder
from .errors import ConfigError, PreconditionError, ServiceError, TransportError
from .network.protocol import RemoteGateway
from .network.soap_gateway import SoapGateway

_logger = logging.getLogger(__name__)


class Api:
    """Orchestrates DigiDocService calls for containers.

    Args:
        gateway: Remote call gateway (usually a SoapGateway).
        encoder: Content codec; a base64 Encoder by default.
        tracker: Change tracker; a fresh one by default.  Containers are
            only usable with the Api whose tracker knows them (see merge()).
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        encoder: Encoder | None = None,
        tracker: Tracker | None = None,
    ) -> None:
        self._gateway = gateway
        self._encoder = encoder if encoder is not None else Encoder()
        self._tracker = tracker if tracker is not None else Tracker()
        self._busy: set[str] = set()
        self._busy_lock = threading.Lock()

    @property
    def tracker(self) -> Tracker:
        return self._tracker

    # ── Public API ────────────────────────────────────────────────────

    def create(self) -> Container:
        """Start a session and create an empty BDOC container in it."""
        result = self._call("StartSession", ["", "", True, ""])
        session = Session(result["Sesscode"])
        self._call("CreateSignedDoc", [session.id, DOC_FORMAT, DOC_VERSION])

        container = Container(session)
        self._tracker.add(container)
        _logger.info("Created %s %s container in session %s", DOC_FORMAT, DOC_VERSION, session.id)
        return container

    def open(self, path: str | Path) -> Container:
        """Upload a local container and mirror its files and signatures.

        Every file and signature found in the document is tracked as
        already synchronized.
        """
        content = self._encoder.encode_file_content(path)
        result = self._call("StartSession", ["", content, True, ""])
        session = Session(result["Sesscode"])
        info = SignedDocInfo.from_result(result.get("SignedDocInfo"))

        container = Container(session)
        for descriptor in info.data_files:
            self._tracker.add(container.add_file(File.from_descriptor(descriptor)))
        for descriptor in info.signatures:
            self._tracker.add(container.add_signature(Signature.from_descriptor(descriptor)))

        self._tracker.add(container)
        _logger.info(
            "Opened %s in session %s: %d file(s), %d signature(s)",
            path,
            session.id,
            len(container.files),
            len(container.signatures),
        )
        return container

    def close(self, container: Container) -> None:
        """Close the remote session.  Must be the last call for a container."""
        with self._exclusive(container):
            self._call("CloseSession", [container.session.id])
        _logger.info("Closed session %s", container.session.id)

    def update(self, container: Container) -> None:
        """
        Push local changes to the service, in this order:

        1. new files are uploaded;
        2. new signatures are prepared and receive their challenge;
        3. signatures with a solution to their challenge are sealed.

        Each phase finishes before the next starts.  A failed call aborts
        the update; items processed before the failure stay tracked, so
        calling update() again only processes the rest.

        Raises:
            PreconditionError: If the container is not merged with this Api.
            ServiceError: If a remote call fails.
        """
        self._fail_if_not_merged(container)
        with self._exclusive(container):
            session = container.session
            untracked = self._untracked
            self._add_files(session, container.files.filter(untracked))
            self._add_signatures(session, container.signatures.filter(untracked))
            self._seal_signatures(session, container.signatures.get_sealable())

    def write(self, container: Container, path: str | Path) -> None:
        """
        Download the container from the service and write it to *path*.

        Local changes not yet pushed with update() are not in the result.

        Raises:
            PreconditionError: If the container is not merged with this Api.
            ServiceError: If the remote call fails or returns no document.
        """
        self._fail_if_not_merged(container)
        with self._exclusive(container):
            result = self._call("GetSignedDoc", [container.session.id])
            payload = result.get("SignedDocData")
            if not payload:
                raise ServiceError("GetSignedDoc response has no SignedDocData")
            data = self._encoder.decode(payload)
        Path(path).write_bytes(data)
        _logger.info("Wrote %d bytes to %s", len(data), path)

    def merge(self, container: Container) -> None:
        """
        Attach a container to this Api.

        Needed when a container outlives the Api that created it (stored
        between requests in a web session, a database, ...).  Everything the
        container holds is assumed to already match remote state; nothing
        is fetched.  Merging an already tracked container does nothing.
        """
        if self._tracker.has(container):
            return

        self._tracker.add(container)
        self._tracker.add(container.files)
        self._tracker.add(container.signatures)
        _logger.debug(
            "Merged container %s: %d file(s), %d signature(s)",
            container.key,
            len(container.files),
            len(container.signatures),
        )

    def describe(self, container: Container) -> SignedDocInfo:
        """Fetch the service's current view of the container.

        Raises:
            PreconditionError: If the container is not merged with this Api.
            ServiceError: If the remote call fails.
        """
        self._fail_if_not_merged(container)
        with self._exclusive(container):
            result = self._call("GetSignedDocInfo", [container.session.id])
        return SignedDocInfo.from_result(result.get("SignedDocInfo"))

    def is_merged(self, container: Container) -> bool:
        return self._tracker.has(container)

    # ── Phases ────────────────────────────────────────────────────────

    def _untracked(self, obj: File | Signature) -> bool:
        return not self._tracker.has(obj)

    def _add_files(self, session: Session, files: list[File]) -> None:
        for file in files:
            if file.pathname is None:
                raise PreconditionError(f"File {file.name!r} has no local content to upload.")
            result = self._call(
                "AddDataFile",
                [
                    session.id,
                    file.name,
                    file.mime_type,
                    CONTENT_TYPE_EMBEDDED,
                    file.size,
                    "",
                    "",
                    self._encoder.encode_file_content(file.pathname),
                ],
            )
            info = SignedDocInfo.from_result(result.get("SignedDocInfo"))
            if info.data_files:
                # The service appends; the newest data file is the last one
                file.id = info.data_files[-1].get("Id")
            self._tracker.add(file)
            if file.is_uploaded:
                _logger.debug("Uploaded %s as %s", file.name, file.id)
            else:
                _logger.warning("AddDataFile returned no data file id for %s", file.name)

    def _add_signatures(self, session: Session, signatures: list[Signature]) -> None:
        for signature in signatures:
            certificate = signature.certificate
            if certificate is None:
                raise PreconditionError("Cannot prepare a signature without a certificate.")
            result = self._call(
                "PrepareSignature", [session.id, certificate.signature, certificate.id]
            )
            signature.prepare(result["SignatureId"], result["SignedInfoDigest"])
            self._tracker.add(signature)

    def _seal_signatures(self, session: Session, signatures: list[Signature]) -> None:
        for signature in signatures:
            self._call("FinalizeSignature", [session.id, signature.id, signature.solution])
            signature.seal()

    # ── Helpers ───────────────────────────────────────────────────────

    def _call(self, method: str, args: Sequence[object]) -> dict[str, Any]:
        _logger.debug("-> %s", method)
        try:
            return self._gateway.call(method, args)
        except (OSError, http.client.HTTPException) as e:
            raise TransportError(f"{method} failed: {e}", retryable=True) from e

    def _fail_if_not_merged(self, container: Container) -> None:
        """
        Raises:
            PreconditionError: If the container is not merged.
        """
        if not self._tracker.has(container):
            raise PreconditionError.not_tracked(container)

    @contextlib.contextmanager
    def _exclusive(self, container: Container) -> Iterator[None]:
        """Refuse to run two operations on one container at the same time."""
        with self._busy_lock:
            if container.key in self._busy:
                raise PreconditionError(
                    f"Container {container.key} is busy with another operation."
                )
            self._busy.add(container.key)
        try:
            yield
        finally:
            with self._busy_lock:
                self._busy.discard(container.key)


# ---------------------------------------------------------------------------
# Endpoint resolution
# ---------------------------------------------------------------------------


def _resolve_profile(profile: str | None, url: str | None) -> ServiceProfile | None:
    """Resolve a ServiceProfile from explicit args or saved config.

    Priority:
        1. ``profile`` name -> built-in profile lookup.
        2. ``url`` -> ad-hoc custom profile.
        3. None: the caller falls back to :func:`get_service_config`.
    """
    if profile is not None and url is not None:
        raise ConfigError("Cannot specify both 'profile' and 'url'. Use one or the other.")

    if profile is not None:
        return get_profile(profile)

    if url is not None:
        return make_custom_profile(url)

    return None


def _resolve_url_and_timeout(
    profile_obj: ServiceProfile | None,
    explicit_timeout: int | None,
) -> tuple[str, int]:
    """Resolve final URL and timeout values.

    Without a profile, the URL comes from :func:`get_service_config`
    (environment variables, then the saved config file).

    Raises:
        ConfigError: If no URL can be determined from any source.
    """
    url = profile_obj.url if profile_obj is not None else None
    timeout = explicit_timeout
    if timeout is None and profile_obj is not None:
        timeout = profile_obj.timeout

    if not url:
        config_url, config_timeout, _ = get_service_config()
        if not config_url:
            raise ConfigError(
                "No service URL configured. "
                "Pass url='https://...' or profile='test', or save a profile."
            )
        url = config_url
        if timeout is None:
            timeout = config_timeout

    if timeout is None:
        timeout = DEFAULT_TIMEOUT_SOAP

    return url, timeout


def connect(
    url: str | None = None,
    *,
    profile: str | None = None,
    timeout: int | None = None,
) -> Api:
    """Create an Api talking SOAP to a DigiDocService endpoint.

    Endpoint resolution (first match wins):
        1. ``profile="test"`` -- a built-in service profile.
        2. ``url="https://..."`` -- a custom endpoint.
        3. Saved configuration / environment variables.

    Raises:
        ConfigError: If no endpoint can be resolved.
    """
    profile_obj = _resolve_profile(profile, url)
    resolved_url, resolved_timeout = _resolve_url_and_timeout(profile_obj, timeout)
    _logger.debug("Connecting to %s (timeout=%ds)", resolved_url, resolved_timeout)
    return Api(SoapGateway(resolved_url, resolved_timeout))
