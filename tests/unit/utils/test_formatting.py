"""Unit tests for Rich formatting helpers."""

import os

from ctxgen.tree.models import EntryKind, Node, ScanIssue, ScanIssueKind, SelectionState
from ctxgen.utils.formatting import err_console, format_node_label, print_scan_issue


class TestFormatNodeLabel:
    """Tests for format_node_label."""

    def test_directory_label(self) -> None:
        """Directory labels carry state and kind styles."""
        node = Node(path="/r/a", kind=EntryKind.DIRECTORY, selection_state=SelectionState.PARTIAL)
        assert format_node_label(node) == f"[partial]◑[/] [directory]a{os.sep}[/]"

    def test_file_label(self) -> None:
        """File labels use the file style."""
        node = Node(path="/r/b", kind=EntryKind.FILE, selection_state=SelectionState.SELECTED)
        assert format_node_label(node) == "[selected]●[/] [file]b[/]"

    def test_markup_in_name_escaped(self) -> None:
        """Square brackets in names are escaped."""
        node = Node(
            path="/r/[draft].md", kind=EntryKind.FILE, selection_state=SelectionState.UNSELECTED
        )
        assert "\\[draft]" in format_node_label(node)


class TestPrintScanIssue:
    """Tests for the CLI warning channel."""

    def test_prints_warning_to_stderr(self) -> None:
        """Issues are printed as warnings on stderr."""
        issue = ScanIssue(kind=ScanIssueKind.DIRECTORY_UNREADABLE, path="/r/x")
        with err_console.capture() as capture:
            print_scan_issue(issue)
        assert "Warning:" in capture.get()
        assert "Unable to read directory: /r/x" in capture.get()
