"""
Extractor configuration loaded from environment variables.

Uses ``pydantic-settings`` for validated, typed configuration.  Defaults
reproduce the classic Truffle layout: artifacts in ``build/contracts``,
ABIs written to ``abis``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class ExtractorConfig(BaseSettings):
    """Configuration for an ABI extraction run.

    Every value can be overridden via an ``ABI_EXPORT_``-prefixed
    environment variable (case-insensitive) or a ``.env`` file.
    Relative paths resolve against the current working directory.
    """

    model_config = {
        "env_prefix": "ABI_EXPORT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # ---- Directories ----
    input_dir: Path = Field(
        default=Path("build/contracts"),
        description="Directory holding compiled build artifacts (JSON).",
    )
    output_dir: Path = Field(
        default=Path("abis"),
        description="Directory the ABI-only files are written to.",
    )
    create_output_dir: bool = Field(
        default=False,
        description="Create output_dir when it does not exist.",
    )

    # ---- Concurrency ----
    max_concurrency: int = Field(
        default=16,
        ge=1,
        description="Maximum number of artifact files processed at once.",
    )

    # ---- Logging ----
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Minimum level of log events printed to the console.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _lowercase_log_level(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value
