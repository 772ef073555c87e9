"""Tests that package entry points import cleanly in a fresh interpreter."""

import subprocess
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parent.parent / "src"


@pytest.mark.parametrize(
    "module",
    [
        "finledger.cli.main",
        "finledger.database",
        "finledger.domain",
        "finledger.domain.entities",
    ],
)
def test_module_imports_first(module):
    """Each module must import on its own, without another finledger module loaded first."""
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        cwd=SRC_DIR,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr


def test_domain_services_are_exported():
    import finledger.domain as domain
    from finledger.domain.account import AccountService

    assert domain.AccountService is AccountService
    with pytest.raises(AttributeError):
        domain.NoSuchService
