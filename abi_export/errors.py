"""
Error taxonomy for ABI extraction.

Only :class:`DirectoryListError` aborts a run.  The per-file errors are
caught by the extractor, logged and recorded on the run report.
"""

from __future__ import annotations


class ExtractorError(RuntimeError):
    """Base class for all extraction failures."""

    def __init__(self, name: str, detail: str) -> None:
        super().__init__(f"{name}: {detail}")
        self.name = name
        self.detail = detail


class DirectoryListError(ExtractorError):
    """The input directory could not be enumerated."""


class FileReadError(ExtractorError):
    """An artifact file could not be read (missing, unreadable, a directory)."""


class ParseError(ExtractorError):
    """Artifact content is not valid JSON or not a JSON object."""


class FileWriteError(ExtractorError):
    """An ABI file could not be written to the output directory."""
