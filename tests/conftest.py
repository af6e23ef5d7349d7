"""Shared test fixtures for digidoc test suite."""

from __future__ import annotations

import datetime
import itertools
from unittest.mock import Mock

import pytest

from digidoc.api import Api
from digidoc.encoder import Encoder

ENCODED_CONTENT = "ZW5jb2RlZA=="
SESSION_ID = 42


class RecordingGateway:
    """In-memory RemoteGateway that records every call in order.

    ``responses`` maps a method name to one of:
      - a dict, returned for every call;
      - an exception instance, raised for every call;
      - a callable, called with the positional arguments;
      - a list of the above, consumed one per call.
    Methods without a scripted response return an empty dict.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, list[object]]] = []

    def call(self, method, args):
        self.calls.append((method, list(args)))
        response = self.responses.get(method, {})
        if isinstance(response, list):
            response = response.pop(0)
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(*args)
        return response

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]

    def args_of(self, method: str) -> list[list[object]]:
        return [args for name, args in self.calls if name == method]


def _prepare_signature_responder():
    counter = itertools.count()

    def _respond(*_args):
        n = next(counter)
        return {"Status": "OK", "SignatureId": f"S{n}", "SignedInfoDigest": f"digest-{n}"}

    return _respond


@pytest.fixture
def gateway():
    """Recording gateway with happy-path responses for every operation."""
    return RecordingGateway(
        {
            "StartSession": {"Status": "OK", "Sesscode": SESSION_ID, "SignedDocInfo": None},
            "CreateSignedDoc": {"Status": "OK"},
            "AddDataFile": {"Status": "OK"},
            "PrepareSignature": _prepare_signature_responder(),
            "FinalizeSignature": {"Status": "OK"},
            "CloseSession": {"Status": "OK"},
            "GetSignedDoc": {"Status": "OK", "SignedDocData": "YmRvYw=="},
        }
    )


@pytest.fixture
def encoder():
    """Mock codec that never touches the filesystem."""
    mock = Mock(spec=Encoder)
    mock.encode_file_content.return_value = ENCODED_CONTENT
    mock.decode.return_value = b"bdoc"
    return mock


@pytest.fixture
def api(gateway, encoder):
    return Api(gateway, encoder)


@pytest.fixture
def sample_path(tmp_path):
    path = tmp_path / "contract.txt"
    path.write_bytes(b"hello world")
    return path


@pytest.fixture
def cert_der():
    """A structurally valid (unsigned) X.509 certificate built with asn1crypto."""
    from asn1crypto import keys, x509

    subject = x509.Name.build(
        {
            "country_name": "EE",
            "organization_name": "ESTEID",
            "common_name": "MÄNNIK,MARI-LIIS,47101010033",
            "serial_number": "47101010033",
        }
    )
    issuer = x509.Name.build({"country_name": "EE", "common_name": "TEST of ESTEID-SK 2015"})
    public_key = keys.PublicKeyInfo(
        {
            "algorithm": {"algorithm": "rsa"},
            "public_key": keys.RSAPublicKey({"modulus": 0xC0FFEE1234567, "public_exponent": 65537}),
        }
    )
    tbs = x509.TbsCertificate(
        {
            "version": "v3",
            "serial_number": 1,
            "signature": {"algorithm": "sha256_rsa"},
            "issuer": issuer,
            "validity": {
                "not_before": x509.Time(
                    name="utc_time",
                    value=datetime.datetime(2020, 1, 1, tzinfo=datetime.timezone.utc),
                ),
                "not_after": x509.Time(
                    name="utc_time",
                    value=datetime.datetime(2040, 1, 1, tzinfo=datetime.timezone.utc),
                ),
            },
            "subject": subject,
            "subject_public_key_info": public_key,
        }
    )
    cert = x509.Certificate(
        {
            "tbs_certificate": tbs,
            "signature_algorithm": {"algorithm": "sha256_rsa"},
            "signature_value": b"\x00" * 16,
        }
    )
    return cert.dump()
