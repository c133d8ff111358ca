"""Artifact parsing and ABI serialization."""

from __future__ import annotations

from pathlib import Path

import pytest

from abi_export.artifacts import (
    AbiFile,
    ArtifactFile,
    ArtifactRecord,
    parse_artifact,
    serialize_abi,
)
from abi_export.errors import ParseError


def _artifact(content: bytes, name: str = "Token.json") -> ArtifactFile:
    return ArtifactFile(name=name, path=Path("build/contracts") / name, content=content)


def test_parse_artifact_keeps_only_abi() -> None:
    record = parse_artifact(
        _artifact(b'{"contractName": "Token", "abi": [{"type": "event"}], "bytecode": "0x00"}')
    )

    assert record == ArtifactRecord(name="Token.json", abi=[{"type": "event"}])


@pytest.mark.parametrize(
    "content",
    [b"{}", b'{"abi": null}', b'{"abi": []}', b'{"abi": "not a list"}', b'{"abi": {"a": 1}}'],
)
def test_parse_artifact_without_usable_abi_yields_empty_record(content: bytes) -> None:
    record = parse_artifact(_artifact(content))

    assert record.abi == []
    assert record.to_abi_file() is None


@pytest.mark.parametrize(
    ("content", "fragment"),
    [
        (b"not valid json", "invalid JSON"),
        (b'{"abi": [', "invalid JSON"),
        (b"\xff\xfe{}", "UTF-8"),
        (b"[1, 2, 3]", "expected a JSON object, got list"),
        (b'"abi"', "expected a JSON object, got str"),
    ],
)
def test_parse_artifact_rejects_malformed_content(content: bytes, fragment: str) -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_artifact(_artifact(content, name="C.json"))

    assert exc_info.value.name == "C.json"
    assert fragment in exc_info.value.detail
    assert str(exc_info.value).startswith("C.json: ")


def test_to_abi_file_serializes_compactly() -> None:
    record = ArtifactRecord(name="A.json", abi=[{"type": "function", "name": "foo"}])

    assert record.to_abi_file() == AbiFile(
        name="A.json",
        content='[{"type":"function","name":"foo"}]',
    )


def test_serialize_abi_preserves_key_order_and_unicode() -> None:
    abi = [{"name": "ünïcode", "type": "function", "inputs": [], "anonymous": False}]

    text = serialize_abi(abi)

    assert text == '[{"name":"ünïcode","type":"function","inputs":[],"anonymous":false}]'
    assert serialize_abi(abi) == text
