"""Tests for digidoc.encoder."""

from __future__ import annotations

import pytest

from digidoc.encoder import Encoder
from digidoc.errors import EncodingError


def test_encode_file_content(sample_path):
    assert Encoder().encode_file_content(sample_path) == "aGVsbG8gd29ybGQ="


def test_encode_file_content_accepts_str_path(sample_path):
    assert Encoder().encode_file_content(str(sample_path)) == "aGVsbG8gd29ybGQ="


def test_encode_missing_file(tmp_path):
    with pytest.raises(EncodingError, match="Cannot read"):
        Encoder().encode_file_content(tmp_path / "missing.txt")


def test_decode():
    assert Encoder().decode("aGVsbG8gd29ybGQ=") == b"hello world"


def test_decode_ignores_line_breaks():
    assert Encoder().decode("aGVsbG8g\nd29y\r\nbGQ=") == b"hello world"


def test_decode_bytes():
    assert Encoder().decode(b"YmRvYw==") == b"bdoc"


def test_decode_empty():
    assert Encoder().decode("") == b""


def test_decode_invalid():
    with pytest.raises(EncodingError, match="Invalid Base64"):
        Encoder().decode("not base64!")
