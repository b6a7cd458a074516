"""Tri-state selection tree module.

This module provides the directory scanner, the selection set handle,
the selection tree model, and the toggle helper used by consumers.
"""

from ctxgen.tree.model import SelectionTreeModel, aggregate_state, name_sort_key
from ctxgen.tree.models import (
    SELECTION_SYMBOLS,
    EntryKind,
    Node,
    ScanEntry,
    ScanIssue,
    ScanIssueKind,
    SelectionState,
    selection_symbol,
)
from ctxgen.tree.scanner import DirectoryScanner, WarningChannel
from ctxgen.tree.selection import ChangeListener, ChangeNotifier, SelectionSet
from ctxgen.tree.toggle import apply_toggle, toggled_selection

__all__ = [
    "SELECTION_SYMBOLS",
    "ChangeListener",
    "ChangeNotifier",
    "DirectoryScanner",
    "EntryKind",
    "Node",
    "ScanEntry",
    "ScanIssue",
    "ScanIssueKind",
    "SelectionSet",
    "SelectionState",
    "SelectionTreeModel",
    "WarningChannel",
    "aggregate_state",
    "apply_toggle",
    "name_sort_key",
    "selection_symbol",
    "toggled_selection",
]
