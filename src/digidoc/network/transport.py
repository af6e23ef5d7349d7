"""
HTTPS transport for DigiDocService.

Public API:
- http_post for SOAP requests

Requests are never retried here; a failed call surfaces as TransportError
and the caller decides what to do.
"""

from __future__ import annotations

__all__ = ["http_post"]

import http.client
import logging
import urllib.error
import urllib.request
from typing import Protocol
from urllib.parse import urlparse

from ..constants import BYTES_PER_MB, DEFAULT_TIMEOUT_SOAP, MAX_RESPONSE_SIZE, RECV_BUFFER_SIZE
from ..errors import TransportError

_logger = logging.getLogger(__name__)

# SOAP 1.1 faults are delivered with this status; the body still has to be parsed
_HTTP_SOAP_FAULT = 500


def _require_https_url(url: str) -> None:
    """Reject non-HTTPS URLs; documents must not travel over plaintext.

    Raises:
        TransportError: If the URL scheme is not https.
    """
    scheme = urlparse(url).scheme.lower()
    if scheme != "https":
        raise TransportError(
            f"Only HTTPS URLs are allowed (got {scheme}://). "
            "Documents must not be sent over unencrypted connections."
        )


class _Readable(Protocol):
    def read(self, amt: int = ...) -> bytes: ...


def _read_with_limit(response: _Readable, url: str) -> bytes:
    """Read an HTTP response body with size limit to prevent memory exhaustion."""
    chunks: list[bytes] = []
    total_size = 0
    while True:
        chunk = response.read(RECV_BUFFER_SIZE)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > MAX_RESPONSE_SIZE:
            raise TransportError(
                f"Response from {url} exceeds {MAX_RESPONSE_SIZE // BYTES_PER_MB} MB limit"
            )
        chunks.append(chunk)
    return b"".join(chunks)


class _SafeRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Redirect handler that refuses HTTPS to HTTP downgrades."""

    def redirect_request(  # type: ignore[override]  # urllib stubs use incompatible signature
        self,
        req: urllib.request.Request,
        fp: http.client.HTTPResponse,
        code: int,
        msg: str,
        headers: http.client.HTTPMessage,
        newurl: str,
    ) -> urllib.request.Request | None:
        parsed_orig = urlparse(req.full_url)
        parsed_new = urlparse(newurl)
        if parsed_orig.scheme == "https" and parsed_new.scheme == "http":
            raise TransportError(f"Refused redirect from HTTPS to HTTP: {newurl}")
        return super().redirect_request(req, fp, code, msg, headers, newurl)


_safe_opener = urllib.request.build_opener(_SafeRedirectHandler)


def _safe_urlopen(
    request: urllib.request.Request, *, timeout: int
) -> http.client.HTTPResponse:
    """Open a Request with safe redirect handling.

    Thin wrapper to simplify testing.
    """
    return _safe_opener.open(request, timeout=timeout)


def _read_fault_body(exc: urllib.error.HTTPError, url: str) -> bytes:
    """Read the body of an HTTP 500 response carrying a SOAP fault."""
    try:
        return _read_with_limit(exc, url)
    except http.client.HTTPException as read_exc:
        raise TransportError(
            f"HTTP POST failed: {url}: {type(read_exc).__name__}: {read_exc}",
            retryable=True,
        ) from read_exc
    finally:
        exc.close()


def http_post(
    url: str,
    body: bytes,
    *,
    headers: dict[str, str] | None = None,
    timeout: int = DEFAULT_TIMEOUT_SOAP,
) -> bytes:
    """
    Send an HTTPS POST and return the response body.

    An HTTP 500 response is returned like a success: SOAP faults travel with
    that status and are decoded by the response parser.

    Args:
        url: Target URL (https only).
        body: Request body bytes.
        headers: Additional HTTP headers.
        timeout: HTTP timeout in seconds.

    Returns:
        Response body as bytes.

    Raises:
        TransportError: On connection, TLS or HTTP failures.
    """
    _require_https_url(url)
    _logger.debug("POST %s (timeout=%ds, %d bytes)", url, timeout, len(body))
    req = urllib.request.Request(url, data=body, method="POST")  # noqa: S310 -- URL is validated as HTTPS above
    if headers:
        for k, v in headers.items():
            req.add_header(k, v)
    try:
        with _safe_urlopen(req, timeout=timeout) as response:
            data = _read_with_limit(response, url)
    except urllib.error.HTTPError as exc:
        if exc.code != _HTTP_SOAP_FAULT:
            raise TransportError(f"HTTP POST failed: {url}: {exc}") from exc
        data = _read_fault_body(exc, url)
        _logger.debug("POST %s -> HTTP %d, %d bytes", url, exc.code, len(data))
        return data
    except http.client.HTTPException as exc:
        # Malformed status line, truncated body, ...; neither OSError nor URLError
        raise TransportError(
            f"HTTP POST failed: {url}: {type(exc).__name__}: {exc}", retryable=True
        ) from exc
    except urllib.error.URLError as exc:
        reason = str(exc.reason) if exc.reason else str(exc)
        retryable = not ("ssl" in reason.lower() or "certificate" in reason.lower())
        raise TransportError(f"HTTP POST failed: {url}: {exc}", retryable=retryable) from exc
    except TimeoutError as exc:
        raise TransportError(
            f"Connection timed out after {timeout}s: {url}",
            retryable=True,
        ) from exc
    _logger.debug("POST %s -> %d bytes", url, len(data))
    return data
