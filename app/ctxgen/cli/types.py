"""Shared types and helpers for CLI commands.

This module provides the selection file reader/writer and the model
factory used across multiple CLI command modules.
"""

import os
from enum import Enum
from pathlib import Path

from ctxgen.core.config import TreeConfig, load_tree_config_or_default
from ctxgen.tree.model import SelectionTreeModel
from ctxgen.tree.scanner import DirectoryScanner, WarningChannel
from ctxgen.tree.selection import SelectionSet
from ctxgen.utils.formatting import print_scan_issue


class OutputFormat(str, Enum):
    """Output format options for listing commands."""

    TABLE = "table"
    JSON = "json"


def read_selection_file(path: Path, root: Path) -> list[str]:
    """Read a plain-text selection list.

    One path per line; blank lines and ``#`` comments are ignored and
    relative paths are resolved against ``root``.

    Args:
        path: Selection file to read.
        root: Directory relative entries are resolved against.

    Returns:
        Absolute paths in file order.

    Raises:
        OSError: If the file cannot be read.
    """
    paths: list[str] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        paths.append(os.path.abspath(os.path.join(root, line)))
    return paths


def write_selection_file(path: Path, paths: list[str]) -> None:
    """Write a selection list, one absolute path per line.

    Raises:
        OSError: If the file cannot be written.
    """
    content = "".join(f"{p}\n" for p in paths)
    path.write_text(content, encoding="utf-8")


def collect_selection(
    root: Path,
    select: list[Path] | None,
    selection_file: Path | None,
) -> list[str]:
    """Merge ``--select`` options and a selection file into one path list."""
    paths: list[str] = []
    if selection_file is not None:
        paths.extend(read_selection_file(selection_file, root))
    for item in select or []:
        paths.append(os.path.abspath(os.path.join(root, item)))
    return paths


def create_model(
    root: Path,
    paths: list[str],
    *,
    config: TreeConfig | None = None,
    show_hidden: bool | None = None,
    warn: WarningChannel | None = print_scan_issue,
) -> SelectionTreeModel:
    """Build a selection tree model from CLI options.

    Args:
        root: Tracked root directory.
        paths: Initial selection.
        config: Tree configuration; loaded from disk if omitted.
        show_hidden: Overrides ``config.exclude_hidden`` when not None.
        warn: Warning channel for recoverable scan issues.

    Returns:
        Configured SelectionTreeModel.
    """
    if config is None:
        config = load_tree_config_or_default()

    exclude_hidden = config.exclude_hidden if show_hidden is None else not show_hidden
    scanner = DirectoryScanner(
        exclude_hidden=exclude_hidden,
        hidden_prefix=config.hidden_prefix,
        warn=warn,
    )
    return SelectionTreeModel(
        root,
        SelectionSet(paths),
        scanner,
        cache_file_sets=config.cache_file_sets,
    )
