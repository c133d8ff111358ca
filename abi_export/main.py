"""
ABI export entry point.

Reads configuration from the environment, applies command-line overrides,
and extracts the ABI of every build artifact in the input directory.

Usage::

    abi-export
    abi-export --input-dir out/ --output-dir abis/ --create-output-dir
    python -m abi_export
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

import structlog
from pydantic import ValidationError

from abi_export.config import ExtractorConfig
from abi_export.errors import ExtractorError
from abi_export.extractor import AbiExtractor, RunReport

logger = structlog.get_logger("abi_export.main")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def configure_logging(level: str = "info") -> None:
    """Install the console structlog pipeline, filtering below *level*."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LEVELS[level]),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abi-export",
        description="Write the ABI of each compiled contract artifact to its own JSON file.",
    )
    parser.add_argument(
        "--input-dir",
        "-i",
        type=Path,
        help="Directory of build artifacts (default: $ABI_EXPORT_INPUT_DIR or build/contracts)",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        help="Directory for ABI files (default: $ABI_EXPORT_OUTPUT_DIR or abis)",
    )
    parser.add_argument(
        "--max-concurrency",
        type=int,
        help="Maximum number of files processed at once (default: 16)",
    )
    parser.add_argument(
        "--create-output-dir",
        action="store_true",
        default=None,
        help="Create the output directory if it does not exist",
    )
    parser.add_argument(
        "--log-level",
        choices=sorted(_LEVELS),
        help="Console log level (default: info)",
    )
    return parser


def load_config(argv: Sequence[str] | None = None) -> ExtractorConfig:
    """Build the config from environment, letting explicit arguments win.

    Raises
    ------
    pydantic.ValidationError
        If a setting is out of range or of the wrong type.
    """
    args = build_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return ExtractorConfig(**overrides)


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


async def run(config: ExtractorConfig) -> RunReport:
    """Run one extraction pass with the given configuration."""
    extractor = AbiExtractor(
        max_concurrency=config.max_concurrency,
        create_output_dir=config.create_output_dir,
    )
    return await extractor.run(config.input_dir, config.output_dir)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse config, run the extractor, and map the outcome to an exit code."""
    try:
        config = load_config(argv)
    except ValidationError as exc:
        configure_logging()
        logger.error("abi_export.invalid_config", errors=exc.errors(include_url=False))
        return EXIT_USAGE

    configure_logging(config.log_level)

    try:
        report = asyncio.run(run(config))
    except ExtractorError as exc:
        logger.error("abi_export.aborted", target=exc.name, error=exc.detail)
        return EXIT_FAILED
    except KeyboardInterrupt:
        logger.info("abi_export.keyboard_interrupt")
        return EXIT_FAILED

    if not report.ok:
        logger.warning("abi_export.completed_with_failures", failed=report.failed)
        return EXIT_FAILED

    logger.info("abi_export.completed", written=len(report.written), skipped=len(report.skipped))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
