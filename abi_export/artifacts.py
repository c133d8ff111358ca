"""
Build artifacts and the ABI files extracted from them.

A build artifact is the JSON object a Solidity toolchain (Truffle, Hardhat,
Foundry) writes per compiled contract.  Only its ``abi`` field is kept::

    {
        "contractName": "Token",
        "abi": [{"type": "function", "name": "transfer", ...}, ...],
        "bytecode": "0x6080...",
        ...
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from abi_export.errors import ParseError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ArtifactFile:
    """Raw artifact as read from disk."""

    name: str
    path: Path
    content: bytes


@dataclass(frozen=True)
class AbiFile:
    """ABI-only output file: a bare, compact JSON array."""

    name: str
    content: str


@dataclass(frozen=True)
class ArtifactRecord:
    """Parsed artifact.  Fields other than ``abi`` are dropped."""

    name: str
    abi: list[Any]

    def to_abi_file(self) -> AbiFile | None:
        """Return the output file for this artifact, or ``None`` if the ABI is empty."""
        if not self.abi:
            return None
        return AbiFile(name=self.name, content=serialize_abi(self.abi))


def parse_artifact(artifact: ArtifactFile) -> ArtifactRecord:
    """Decode and parse an artifact's content.

    A missing, ``null`` or non-array ``abi`` yields an empty ABI rather than
    an error; such artifacts are skipped by the extractor.

    Raises
    ------
    ParseError
        If the content is not UTF-8, not valid JSON, or not a JSON object.
    """
    try:
        data = json.loads(artifact.content.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ParseError(artifact.name, f"content is not valid UTF-8 ({exc.reason})") from exc
    except json.JSONDecodeError as exc:
        raise ParseError(artifact.name, f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ParseError(
            artifact.name,
            f"expected a JSON object, got {type(data).__name__}",
        )

    abi = data.get("abi")
    if not isinstance(abi, list):
        if abi is not None:
            logger.debug(
                "artifacts.abi_not_array",
                file=artifact.name,
                kind=type(abi).__name__,
            )
        abi = []

    return ArtifactRecord(name=artifact.name, abi=abi)


def serialize_abi(abi: list[Any]) -> str:
    """Compact JSON text for *abi*: no whitespace, key order kept, non-ASCII verbatim."""
    return json.dumps(abi, separators=(",", ":"), ensure_ascii=False)
