"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from ctxgen.tree.models import ScanIssue


def build_tree(root: Path, files: list[str], dirs: list[str] | None = None) -> Path:
    """Create ``files`` (and empty ``dirs``) under ``root``.

    Paths are relative and use ``/`` as separator. File content is the
    relative path itself.
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel in dirs or []:
        (root / rel).mkdir(parents=True, exist_ok=True)
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(rel)
    return root


@pytest.fixture
def tree_factory(tmp_path: Path) -> Callable[..., Path]:
    """Factory building a directory tree under a fresh root."""

    def factory(files: list[str], dirs: list[str] | None = None) -> Path:
        return build_tree(tmp_path / "root", files, dirs)

    return factory


@pytest.fixture
def sample_root(tmp_path: Path) -> Path:
    """Root with dir ``a/`` holding ``x`` and ``y``, and file ``b``."""
    return build_tree(tmp_path / "r", ["a/x", "a/y", "b"])


@pytest.fixture
def issues() -> list[ScanIssue]:
    """List collecting scan issues; pass ``issues.append`` as warning channel."""
    return []
