"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[list[str]], Path]:
    """Create a directory tree below tmp_path/vol1.

    Entries ending with "/" become directories, everything else becomes
    a small file (parents are created as needed).
    """

    def _make(entries: list[str]) -> Path:
        base = tmp_path / "vol1"
        base.mkdir(exist_ok=True)
        for entry in entries:
            target = base / entry
            if entry.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text("junk")
        return base

    return _make
