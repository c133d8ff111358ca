#!/usr/bin/env python3
"""Extract contract ABIs from build/contracts into abis/.

Run from anywhere after compiling the contracts::

    chmod +x scripts/export_abis.py
    scripts/export_abis.py

Extra arguments are passed through to ``abi-export``; explicit
``--input-dir`` / ``--output-dir`` override the repo-relative defaults.
"""

import sys
from pathlib import Path

from abi_export.main import main as abi_export_main

REPO_ROOT = Path(__file__).resolve().parent.parent
BUILD_DIR = REPO_ROOT / "build" / "contracts"
ABI_DIR = REPO_ROOT / "abis"


def main(argv: list[str] | None = None) -> int:
    args = ["--input-dir", str(BUILD_DIR), "--output-dir", str(ABI_DIR)]
    args.extend(sys.argv[1:] if argv is None else argv)
    return abi_export_main(args)


if __name__ == "__main__":
    raise SystemExit(main())
