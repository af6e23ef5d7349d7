"""Tests for Container, its collections and the entity proxies."""

from __future__ import annotations

import json

import pytest

from digidoc.core.collections import FileCollection, SignatureCollection
from digidoc.core.container import Container
from digidoc.core.entities import Certificate, File, Session
from digidoc.core.signature import Signature, SignatureState

CERT = Certificate(id="token-1", signature="3082")


def _prepared(solution=None):
    signature = Signature(CERT)
    signature.prepare("S0", "digest")
    if solution is not None:
        signature.solution = solution
    return signature


# ── Collections ─────────────────────────────────────────────────────


def test_collection_keeps_insertion_order():
    files = FileCollection()
    for name in ("c.txt", "a.txt", "b.txt"):
        files.add(File(name))

    assert [f.name for f in files] == ["c.txt", "a.txt", "b.txt"]
    assert files[1].name == "a.txt"
    assert files.first().name == "c.txt"
    assert len(files) == 3


def test_collection_first_on_empty():
    assert FileCollection().first() is None


def test_collection_filter():
    files = FileCollection([File("a.txt", size=1), File("b.txt", size=5)])
    assert [f.name for f in files.filter(lambda f: f.size > 2)] == ["b.txt"]


def test_to_list_is_a_copy():
    files = FileCollection([File("a.txt")])
    copy = files.to_list()
    copy.clear()
    assert len(files) == 1


def test_get_sealable():
    ready = _prepared("abc")
    signatures = SignatureCollection([Signature(CERT), _prepared(), ready])
    assert signatures.get_sealable() == [ready]


# ── Container ───────────────────────────────────────────────────────


def test_add_returns_item():
    container = Container(Session(1))
    file = File("a.txt")
    signature = Signature(CERT)

    assert container.add_file(file) is file
    assert container.add_signature(signature) is signature
    assert container.files.first() is file
    assert container.signatures.first() is signature


def test_containers_have_distinct_keys():
    assert Container(Session(1)).key != Container(Session(1)).key


def test_to_dict_is_json_serializable():
    container = Container(Session("abc"))
    container.add_file(File("a.txt", "text/plain", 3, "/tmp/a.txt", id="D0"))
    container.add_signature(_prepared("solution"))

    data = json.loads(json.dumps(container.to_dict()))

    assert data["session"] == "abc"
    assert data["files"][0]["id"] == "D0"
    assert data["signatures"][0]["state"] == "prepared"
    assert data["signatures"][0]["solution"] == "solution"


def test_from_dict_restores_keys_and_state():
    container = Container(Session(9))
    file = container.add_file(File("a.txt", pathname="/tmp/a.txt", id="D0"))
    signature = container.add_signature(_prepared("solution"))
    sealed = container.add_signature(Signature.from_descriptor({"Id": "S1"}))

    restored = Container.from_dict(container.to_dict())

    assert restored.key == container.key
    assert restored.session == Session(9)
    assert restored.files[0].key == file.key
    assert restored.files[0].pathname == "/tmp/a.txt"
    assert restored.signatures[0].key == signature.key
    assert restored.signatures[0].certificate == CERT
    assert restored.signatures[0].is_sealable
    assert restored.signatures[1].key == sealed.key
    assert restored.signatures[1].state is SignatureState.SEALED


def test_from_dict_created_signature():
    container = Container(Session(9))
    container.add_signature(Signature(CERT))

    restored = Container.from_dict(container.to_dict())

    assert restored.signatures[0].state is SignatureState.CREATED
    assert restored.signatures[0].solution is None


# ── Entities ────────────────────────────────────────────────────────


def test_file_from_path(sample_path):
    file = File.from_path(sample_path)

    assert file.name == "contract.txt"
    assert file.mime_type == "text/plain"
    assert file.size == 11
    assert file.pathname == str(sample_path)
    assert not file.is_uploaded


def test_file_from_path_unknown_extension(tmp_path):
    path = tmp_path / "blob.unknownext"
    path.write_bytes(b"x")
    assert File.from_path(path).mime_type == "application/octet-stream"


def test_file_from_path_explicit_mime(sample_path):
    assert File.from_path(sample_path, "application/pdf").mime_type == "application/pdf"


def test_file_from_descriptor():
    file = File.from_descriptor(
        {"Id": "D0", "Filename": "example.doc", "MimeType": "application/msword", "Size": "42"}
    )
    assert file.id == "D0"
    assert file.name == "example.doc"
    assert file.size == 42
    assert file.pathname is None
    assert file.is_uploaded


def test_file_from_sparse_descriptor():
    file = File.from_descriptor({"Id": "D1", "Size": None})
    assert file.name == ""
    assert file.size == 0
    assert file.mime_type == "application/octet-stream"


def test_files_are_not_equal_by_value():
    assert File("a.txt") != File("a.txt")


def test_session_is_immutable():
    session = Session(1)
    with pytest.raises(AttributeError):
        session.id = 2


def test_from_dict_keeps_solution_of_sealed_signature():
    container = Container(Session(9))
    signature = container.add_signature(_prepared("solution"))
    signature.seal()

    restored = Container.from_dict(json.loads(json.dumps(container.to_dict())))

    assert restored.signatures[0].is_sealed
    assert restored.signatures[0].solution == "solution"
