"""
Convenience script to run the full test suite.

Usage (from project root):

    python tests.py

Installs the package with its `dev` extra when pytest or `blot` cannot be
imported, then runs the Blot engine tests under `tests/`.
"""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parent


def ensure_test_dependencies() -> None:
    """Ensure pytest and the package itself are importable."""
    try:
        import pytest  # noqa: F401
        import blot  # noqa: F401
        return
    except ImportError:
        pass

    print("Installing test dependencies (.[dev]) ...")
    subprocess.check_call(
        [sys.executable, "-m", "pip", "install", "-e", ".[dev]"],
        cwd=str(ROOT),
    )


def main() -> None:
    ensure_test_dependencies()
    print("Running test suite with pytest ...")
    subprocess.check_call(
        [sys.executable, "-m", "pytest"],
        cwd=str(ROOT),
    )


if __name__ == "__main__":
    main()
