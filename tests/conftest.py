"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from fakes import FakeDirectorySource


@pytest.fixture
def fake_source() -> FakeDirectorySource:
    """Empty in-memory filesystem with a root directory at /r."""
    source = FakeDirectorySource()
    source.add_dir("/r", inode=1)
    return source


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Small directory tree on disk.

    Layout::

        root/
            b.txt
            A.txt
            a.txt
            docs/
                readme.md
                notes/
                    todo.txt
            src/
                main.py
    """
    root = tmp_path / "root"
    (root / "docs" / "notes").mkdir(parents=True)
    (root / "src").mkdir()
    for name in ("b.txt", "A.txt", "a.txt"):
        (root / name).write_text(name)
    (root / "docs" / "readme.md").write_text("readme")
    (root / "docs" / "notes" / "todo.txt").write_text("todo")
    (root / "src" / "main.py").write_text("print()")
    return root
