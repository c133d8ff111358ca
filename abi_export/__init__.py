"""
ABI export: pull the ``abi`` array out of compiled contract artifacts.
"""

from abi_export.artifacts import (
    AbiFile,
    ArtifactFile,
    ArtifactRecord,
    parse_artifact,
    serialize_abi,
)
from abi_export.config import ExtractorConfig
from abi_export.errors import (
    DirectoryListError,
    ExtractorError,
    FileReadError,
    FileWriteError,
    ParseError,
)
from abi_export.extractor import AbiExtractor, FileOutcome, FileStatus, RunReport

__all__ = [
    "AbiExtractor",
    "AbiFile",
    "ArtifactFile",
    "ArtifactRecord",
    "ExtractorConfig",
    "FileOutcome",
    "FileStatus",
    "RunReport",
    "parse_artifact",
    "serialize_abi",
    # errors
    "DirectoryListError",
    "ExtractorError",
    "FileReadError",
    "FileWriteError",
    "ParseError",
]
