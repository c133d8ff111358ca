"""
ABI extraction over a directory of build artifacts.

Every entry of the input directory is processed as an independent task:
read, parse, filter on a non-empty ``abi``, write.  Tasks run concurrently
(bounded by a semaphore) and the run only completes once all of them have
settled.  A failing file is logged and recorded on the :class:`RunReport`;
it never stops its siblings.
"""

from __future__ import annotations

import asyncio
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import structlog

from abi_export.artifacts import AbiFile, ArtifactFile, parse_artifact
from abi_export.errors import (
    DirectoryListError,
    ExtractorError,
    FileReadError,
    FileWriteError,
)

logger = structlog.get_logger(__name__)

DEFAULT_MAX_CONCURRENCY = 16


class FileStatus(str, Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing a single directory entry."""

    name: str
    status: FileStatus
    abi_entries: int = 0
    error: Exception | None = None


@dataclass
class RunReport:
    """Aggregated outcomes of one extraction run."""

    input_dir: Path
    output_dir: Path
    outcomes: list[FileOutcome] = field(default_factory=list)

    def _names(self, status: FileStatus) -> list[str]:
        return sorted(o.name for o in self.outcomes if o.status is status)

    @property
    def written(self) -> list[str]:
        return self._names(FileStatus.WRITTEN)

    @property
    def skipped(self) -> list[str]:
        return self._names(FileStatus.SKIPPED)

    @property
    def failed(self) -> list[str]:
        return self._names(FileStatus.FAILED)

    @property
    def ok(self) -> bool:
        """True when no file failed."""
        return not any(o.status is FileStatus.FAILED for o in self.outcomes)

    def summary(self) -> dict[str, int]:
        return {
            "total": len(self.outcomes),
            "written": len(self.written),
            "skipped": len(self.skipped),
            "failed": len(self.failed),
        }


class AbiExtractor:
    """Writes the ``abi`` array of each build artifact to its own file.

    Parameters
    ----------
    max_concurrency:
        Upper bound on per-file tasks in flight at once.
    create_output_dir:
        Create the output directory (and parents) when it does not exist.
        By default a missing output directory makes every write fail.
    """

    def __init__(
        self,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        create_output_dir: bool = False,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}.")
        self._max_concurrency = max_concurrency
        self._create_output_dir = create_output_dir

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self, input_dir: str | Path, output_dir: str | Path) -> RunReport:
        """Extract ABIs from every entry of *input_dir* into *output_dir*.

        Returns
        -------
        RunReport
            One outcome per directory entry.

        Raises
        ------
        DirectoryListError
            If *input_dir* cannot be listed.  No file is processed.
        FileWriteError
            If ``create_output_dir`` is set and the directory cannot be created,
            or if *output_dir* is *input_dir* (artifacts would be overwritten).
        """
        input_dir = Path(input_dir)
        output_dir = Path(output_dir)
        if input_dir.resolve() == output_dir.resolve():
            logger.error("extractor.same_directory", directory=str(input_dir))
            raise FileWriteError(
                str(output_dir),
                "output directory is the input directory; artifacts would be overwritten",
            )

        report = RunReport(input_dir=input_dir, output_dir=output_dir)
        names = await asyncio.to_thread(_list_entries, input_dir)
        logger.info(
            "extractor.run.start",
            input_dir=str(input_dir),
            output_dir=str(output_dir),
            entries=len(names),
        )

        if self._create_output_dir:
            await asyncio.to_thread(_ensure_dir, output_dir)

        semaphore = asyncio.Semaphore(self._max_concurrency)
        results = await asyncio.gather(
            *(self._process(input_dir / name, output_dir, semaphore) for name in names),
            return_exceptions=True,
        )

        for name, result in zip(names, results):
            if isinstance(result, FileOutcome):
                report.outcomes.append(result)
            elif isinstance(result, Exception):
                logger.error("extractor.file.unexpected_error", file=name, error=repr(result))
                report.outcomes.append(FileOutcome(name, FileStatus.FAILED, error=result))
            else:
                # CancelledError / KeyboardInterrupt are not ours to swallow.
                raise result

        logger.info("extractor.run.done", **report.summary())
        return report

    # ------------------------------------------------------------------
    # Per-file pipeline
    # ------------------------------------------------------------------

    async def _process(
        self,
        path: Path,
        output_dir: Path,
        semaphore: asyncio.Semaphore,
    ) -> FileOutcome:
        name = path.name
        async with semaphore:
            try:
                artifact = await asyncio.to_thread(_read_artifact, path)
                record = parse_artifact(artifact)
                abi_file = record.to_abi_file()
                if abi_file is None:
                    logger.debug("extractor.file.skipped", file=name, reason="empty abi")
                    return FileOutcome(name, FileStatus.SKIPPED)

                await asyncio.to_thread(_write_abi_file, output_dir, abi_file)
            except ExtractorError as exc:
                logger.error(
                    "extractor.file.failed",
                    file=name,
                    kind=type(exc).__name__,
                    error=exc.detail,
                )
                return FileOutcome(name, FileStatus.FAILED, error=exc)
            except Exception as exc:
                logger.exception("extractor.file.unexpected_error", file=name)
                return FileOutcome(name, FileStatus.FAILED, error=exc)

        logger.info("extractor.file.written", file=name, entries=len(record.abi))
        return FileOutcome(name, FileStatus.WRITTEN, abi_entries=len(record.abi))


# ----------------------------------------------------------------------
# Blocking filesystem helpers (run in worker threads)
# ----------------------------------------------------------------------


def _list_entries(input_dir: Path) -> list[str]:
    try:
        return sorted(entry.name for entry in input_dir.iterdir())
    except OSError as exc:
        logger.error("extractor.list_failed", input_dir=str(input_dir), error=str(exc))
        raise DirectoryListError(str(input_dir), f"unable to scan directory: {exc}") from exc


def _ensure_dir(output_dir: Path) -> None:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("extractor.output_dir_failed", output_dir=str(output_dir), error=str(exc))
        raise FileWriteError(str(output_dir), f"unable to create directory: {exc}") from exc


def _read_artifact(path: Path) -> ArtifactFile:
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise FileReadError(path.name, f"unable to read: {exc}") from exc
    return ArtifactFile(name=path.name, path=path, content=content)


def _write_abi_file(output_dir: Path, abi_file: AbiFile) -> Path:
    # Written to a sibling temp file and renamed, so a failed write never
    # leaves a truncated ABI in place of the previous one.
    target = output_dir / abi_file.name
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=output_dir,
            prefix=f".{abi_file.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_path = Path(handle.name)
            handle.write(abi_file.content)
        os.replace(tmp_path, target)
    except OSError as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise FileWriteError(abi_file.name, f"unable to write {target}: {exc}") from exc
    return target
