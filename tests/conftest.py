"""Shared pytest fixtures for the abi-export test suite."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep host ``ABI_EXPORT_*`` variables, ``.env`` files and logging config out of tests."""

    for key in (
        "ABI_EXPORT_INPUT_DIR",
        "ABI_EXPORT_OUTPUT_DIR",
        "ABI_EXPORT_MAX_CONCURRENCY",
        "ABI_EXPORT_CREATE_OUTPUT_DIR",
        "ABI_EXPORT_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    structlog.reset_defaults()


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    path = tmp_path / "build" / "contracts"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def abi_dir(tmp_path: Path) -> Path:
    path = tmp_path / "abis"
    path.mkdir()
    return path


@pytest.fixture
def write_artifact(build_dir: Path) -> Callable[[str, Any], Path]:
    """Write an artifact into the build dir; strings are written verbatim, else as JSON."""

    def _write(name: str, content: Any) -> Path:
        path = build_dir / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        elif isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write
