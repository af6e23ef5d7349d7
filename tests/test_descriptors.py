"""Tests for descriptor normalization."""

from __future__ import annotations

import pytest

from digidoc.core.descriptors import SignedDocInfo, as_list, find_by_id
from digidoc.errors import NotFoundError


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, []),
        ({"Id": "D0"}, [{"Id": "D0"}]),
        ([{"Id": "D0"}, {"Id": "D1"}], [{"Id": "D0"}, {"Id": "D1"}]),
        ([], []),
    ],
)
def test_as_list(value, expected):
    assert as_list(value) == expected


def test_as_list_drops_empty_entries():
    assert as_list([{"Id": "D0"}, None]) == [{"Id": "D0"}]


def test_find_by_id():
    descriptors = [{"Id": "S0"}, {"Id": "S1", "Status": "OK"}]
    assert find_by_id(descriptors, "S1") == {"Id": "S1", "Status": "OK"}


def test_find_by_id_missing():
    with pytest.raises(NotFoundError, match='No remote object with id "S7" was found.'):
        find_by_id([{"Id": "S0"}], "S7")


def test_find_by_id_in_empty_list():
    with pytest.raises(NotFoundError):
        find_by_id([], "D0")


def test_signed_doc_info_from_none():
    info = SignedDocInfo.from_result(None)
    assert info.data_files == []
    assert info.signatures == []
    assert info.format is None


def test_signed_doc_info_from_result():
    info = SignedDocInfo.from_result(
        {
            "format": "BDOC",
            "version": "2.1",
            "DataFileInfo": {"Id": "D0", "Filename": "a.txt"},
            "SignatureInfo": None,
        }
    )
    assert info.format == "BDOC"
    assert info.version == "2.1"
    assert info.get_data_file("D0")["Filename"] == "a.txt"
    assert info.signatures == []
    with pytest.raises(NotFoundError):
        info.get_signature("S0")
