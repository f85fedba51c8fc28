"""
Shared Test Fixtures
====================

Fixtures used across the bplang test suite.
"""

from pathlib import Path

import pytest


@pytest.fixture
def write_bp(tmp_path):
    """Write BP source to a file in tmp_path and return its path."""

    def _write(source: str, name: str = "program.bp") -> Path:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def clean_toolchain_env(monkeypatch):
    """Keep the caller's BP_* settings out of the tests."""
    for var in ("BP_CC", "BP_CFLAGS", "BP_RUN_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
