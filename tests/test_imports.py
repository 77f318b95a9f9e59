"""Tests that the package imports cleanly in a fresh interpreter."""

import subprocess
import sys

import pytest


@pytest.mark.parametrize(
    "module",
    [
        "ledgerbook.cli.main",
        "ledgerbook.database",
        "ledgerbook.database.memory",
        "ledgerbook.domain",
    ],
)
def test_module_imports_first(module):
    """Each entry point must import without relying on another being loaded first."""
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
