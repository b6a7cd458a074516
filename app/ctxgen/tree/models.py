"""Selection tree domain models.

This module defines the core data structures shared by the directory
scanner and the selection tree model: entry kinds, tri-state selection
states, recoverable scan issues, and the Node value handed to consumers.
"""

import os
from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """Kind of filesystem entry presented in the tree.

    Attributes:
        FILE: Leaf entry (anything that is not a directory).
        DIRECTORY: Directory entry that can be expanded.
    """

    FILE = "file"
    DIRECTORY = "directory"


class SelectionState(str, Enum):
    """Tri-state selection of a node.

    Attributes:
        UNSELECTED: No descendant file (or the file itself) is selected.
        PARTIAL: Some, but not all, descendant files are selected.
            Only reachable for directories.
        SELECTED: The file is selected, or every descendant file of a
            non-empty directory is selected.
    """

    UNSELECTED = "unselected"
    PARTIAL = "partial"
    SELECTED = "selected"


class ScanIssueKind(str, Enum):
    """Recoverable fault reported while scanning.

    Attributes:
        DIRECTORY_UNREADABLE: The directory itself could not be listed.
        ENTRY_UNSTATTABLE: A single entry could not be inspected.
    """

    DIRECTORY_UNREADABLE = "directory_unreadable"
    ENTRY_UNSTATTABLE = "entry_unstattable"


# Selection symbols shared by every renderer
SELECTION_SYMBOLS: dict[SelectionState, str] = {
    SelectionState.SELECTED: "●",  # Filled circle
    SelectionState.PARTIAL: "◑",  # Half-filled circle
    SelectionState.UNSELECTED: "○",  # Hollow circle
}


def selection_symbol(state: SelectionState) -> str:
    """Return the marker symbol for a selection state."""
    return SELECTION_SYMBOLS[state]


@dataclass(frozen=True, slots=True)
class ScanEntry:
    """One immediate directory entry as classified by the scanner.

    Attributes:
        name: Base name of the entry.
        kind: File or directory.
    """

    name: str
    kind: EntryKind

    @property
    def is_directory(self) -> bool:
        """Check if this entry is a directory."""
        return self.kind == EntryKind.DIRECTORY


@dataclass(frozen=True, slots=True)
class ScanIssue:
    """A recoverable fault observed during a scan.

    Attributes:
        kind: Issue classification.
        path: Offending filesystem path.
        detail: Human-readable reason (usually the OS error text).
    """

    kind: ScanIssueKind
    path: str
    detail: str = ""

    @property
    def message(self) -> str:
        """Human-readable one-line description of the issue."""
        if self.kind == ScanIssueKind.DIRECTORY_UNREADABLE:
            text = f"Unable to read directory: {self.path}"
        else:
            text = f"Unable to access file: {self.path}"
        if self.detail:
            text = f"{text} ({self.detail})"
        return text


@dataclass(frozen=True, slots=True)
class Node:
    """A filesystem entry as presented to a consumer.

    Nodes are constructed fresh on every query and never cached, so a
    node's selection state reflects the selection set at the time it was
    built.

    Attributes:
        path: Absolute filesystem path; the node's identity.
        kind: File or directory.
        selection_state: Tri-state selection at construction time.
    """

    path: str
    kind: EntryKind
    selection_state: SelectionState

    def __post_init__(self) -> None:
        """Validate node data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.kind == EntryKind.FILE and self.selection_state == SelectionState.PARTIAL:
            msg = f"File node cannot be partially selected: {self.path}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Base name of the node."""
        return os.path.basename(self.path.rstrip(os.sep)) or self.path

    @property
    def display_name(self) -> str:
        """Base name with a trailing separator for directories."""
        if self.is_directory:
            return f"{self.name}{os.sep}"
        return self.name

    @property
    def is_directory(self) -> bool:
        """Check if this node is a directory."""
        return self.kind == EntryKind.DIRECTORY

    @property
    def symbol(self) -> str:
        """Selection marker for this node's state."""
        return selection_symbol(self.selection_state)
