"""Tests for digidoc.network.soap_gateway."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from digidoc.errors import ServiceError
from digidoc.network import RemoteGateway, SoapGateway

_OK = """\
<SOAP-ENV:Envelope xmlns:SOAP-ENV="http://schemas.xmlsoap.org/soap/envelope/">
  <SOAP-ENV:Body>
    <CreateSignedDocResponse><Status>OK</Status></CreateSignedDocResponse>
  </SOAP-ENV:Body>
</SOAP-ENV:Envelope>"""

_FAULT = """\
<SOAP-ENV:Envelope xmlns:SOAP-ENV="http://schemas.xmlsoap.org/soap/envelope/">
  <SOAP-ENV:Body>
    <SOAP-ENV:Fault><faultcode>Client</faultcode><faultstring>103</faultstring></SOAP-ENV:Fault>
  </SOAP-ENV:Body>
</SOAP-ENV:Envelope>"""


def test_satisfies_protocol():
    gateway: RemoteGateway = SoapGateway("https://tsp.demo.sk.ee/")
    assert callable(gateway.call)


def test_call_sends_envelope_and_parses_response():
    gateway = SoapGateway("https://tsp.demo.sk.ee/", timeout=15)

    with patch("digidoc.network.soap_gateway.send_soap", return_value=_OK) as mock_send:
        result = gateway.call("CreateSignedDoc", [42, "BDOC", "2.1"])

    assert result == {"Status": "OK"}
    args, kwargs = mock_send.call_args
    assert args[0] == "https://tsp.demo.sk.ee/"
    assert "<Format>BDOC</Format>" in args[1]
    assert kwargs == {"action": "CreateSignedDoc", "timeout": 15}


def test_call_raises_service_error_on_fault():
    gateway = SoapGateway("https://tsp.demo.sk.ee/")
    with (
        patch("digidoc.network.soap_gateway.send_soap", return_value=_FAULT),
        pytest.raises(ServiceError) as exc_info,
    ):
        gateway.call("CloseSession", [1])
    assert exc_info.value.code == "103"


def test_repr():
    assert repr(SoapGateway("https://x.example/", 5)) == "SoapGateway('https://x.example/', timeout=5)"
