"""Unit tests for the tree, checked and toggle CLI commands."""

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from ctxgen.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the config directory at an empty temp location."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


# =============================================================================
# Global options
# =============================================================================


class TestGlobalOptions:
    """Tests for global CLI options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "ctxgen version" in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without a command shows usage."""
        result = runner.invoke(app, [])
        assert "Usage" in result.output


# =============================================================================
# tree
# =============================================================================


class TestTreeCommand:
    """Tests for ctxgen tree."""

    def test_renders_states(self, sample_root: Path) -> None:
        """The tree shows directory and file markers for the selection."""
        result = runner.invoke(app, ["tree", str(sample_root), "--select", "a/x"])

        assert result.exit_code == 0
        assert f"◑ a{os.sep}" in result.stdout
        assert "● x" in result.stdout
        assert "○ y" in result.stdout
        assert "○ b" in result.stdout

    def test_directories_listed_before_files(self, sample_root: Path) -> None:
        """Directory rows come before file rows."""
        result = runner.invoke(app, ["tree", str(sample_root)])
        assert result.stdout.index(f"a{os.sep}") < result.stdout.index("○ b")

    def test_selection_file(self, sample_root: Path, tmp_path: Path) -> None:
        """Selections can be read from a file."""
        selection = tmp_path / "selection.txt"
        selection.write_text("# picked\na/x\n\na/y\n")

        result = runner.invoke(
            app, ["tree", str(sample_root), "--selection-file", str(selection)]
        )

        assert result.exit_code == 0
        assert f"● a{os.sep}" in result.stdout

    def test_depth_limits_expansion(self, sample_root: Path) -> None:
        """--depth 1 shows only the first level."""
        result = runner.invoke(app, ["tree", str(sample_root), "--depth", "1"])
        assert result.exit_code == 0
        assert f"a{os.sep}" in result.stdout
        assert "○ x" not in result.stdout

    def test_hidden_toggle(self, tree_factory: Callable[..., Path]) -> None:
        """--hidden shows dot entries that are excluded by default."""
        root = tree_factory([".env", "main.py"])

        hidden_off = runner.invoke(app, ["tree", str(root)])
        hidden_on = runner.invoke(app, ["tree", str(root), "--hidden"])

        assert ".env" not in hidden_off.stdout
        assert ".env" in hidden_on.stdout

    def test_link_to_ancestor_not_expanded(self, tree_factory: Callable[..., Path]) -> None:
        """A directory link pointing back up the tree is not rendered."""
        root = tree_factory(["a/x"])
        os.symlink(root, root / "a" / "loop")

        result = runner.invoke(app, ["tree", str(root)])

        assert result.exit_code == 0
        assert "○ x" in result.stdout
        assert "loop" not in result.output

    def test_not_a_directory(self, tmp_path: Path) -> None:
        """A missing root is an error."""
        result = runner.invoke(app, ["tree", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Not a directory" in result.output

    def test_missing_selection_file(self, sample_root: Path, tmp_path: Path) -> None:
        """An unreadable selection file is an error."""
        result = runner.invoke(
            app,
            ["tree", str(sample_root), "--selection-file", str(tmp_path / "nope.txt")],
        )
        assert result.exit_code == 1
        assert "Cannot read selection file" in result.output

    def test_scan_issue_printed_as_warning(self, tree_factory: Callable[..., Path]) -> None:
        """Recoverable issues are reported without failing the command."""
        root = tree_factory(["ok.txt"])
        os.symlink(root / "nowhere", root / "broken")

        result = runner.invoke(app, ["tree", str(root)])

        assert result.exit_code == 0
        assert "ok.txt" in result.stdout
        assert "Unable to access file" in result.output


# =============================================================================
# checked
# =============================================================================


class TestCheckedCommand:
    """Tests for ctxgen checked."""

    def test_table_output(self, sample_root: Path) -> None:
        """Checked files are listed in a table."""
        result = runner.invoke(
            app, ["checked", str(sample_root), "-s", "b", "-s", "a/x", "-s", "b"]
        )
        assert result.exit_code == 0
        assert "Checked Files" in result.stdout
        assert "2 file(s) selected" in result.stdout

    def test_json_output(self, sample_root: Path) -> None:
        """JSON output lists one selected file per unique path."""
        result = runner.invoke(
            app, ["checked", str(sample_root), "-s", "b", "-s", "a/x", "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [item["path"] for item in data] == [
            str(sample_root / "a" / "x"),
            str(sample_root / "b"),
        ]
        assert {item["state"] for item in data} == {"selected"}
        assert {item["kind"] for item in data} == {"file"}

    def test_empty_selection(self, sample_root: Path) -> None:
        """An empty selection prints an info message."""
        result = runner.invoke(app, ["checked", str(sample_root)])
        assert result.exit_code == 0
        assert "No files selected" in result.stdout


# =============================================================================
# toggle
# =============================================================================


class TestToggleCommand:
    """Tests for ctxgen toggle."""

    def test_prints_new_selection(self, sample_root: Path, tmp_path: Path) -> None:
        """Without --write, the new selection is printed one path per line."""
        selection = tmp_path / "selection.txt"
        selection.write_text("a/x\n")

        result = runner.invoke(
            app,
            ["toggle", "a", "--root", str(sample_root), "--selection-file", str(selection)],
        )

        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            str(sample_root / "a" / "x"),
            str(sample_root / "a" / "y"),
        ]
        assert selection.read_text() == "a/x\n"

    def test_write_back(self, sample_root: Path, tmp_path: Path) -> None:
        """With --write, the selection file is replaced."""
        selection = tmp_path / "selection.txt"
        selection.write_text(f"{sample_root / 'b'}\n")

        result = runner.invoke(
            app,
            [
                "toggle",
                "b",
                "--root",
                str(sample_root),
                "--selection-file",
                str(selection),
                "--write",
            ],
        )

        assert result.exit_code == 0
        assert selection.read_text() == ""
        assert "unselected" in result.stdout

    def test_new_selection_file(self, sample_root: Path, tmp_path: Path) -> None:
        """A missing selection file starts from an empty selection."""
        selection = tmp_path / "new.txt"

        result = runner.invoke(
            app,
            ["toggle", "b", "-r", str(sample_root), "-f", str(selection), "--write"],
        )

        assert result.exit_code == 0
        assert selection.read_text() == f"{sample_root / 'b'}\n"

    def test_missing_target(self, sample_root: Path, tmp_path: Path) -> None:
        """Toggling a path that does not exist is an error."""
        result = runner.invoke(
            app,
            ["toggle", "nope", "-r", str(sample_root), "-f", str(tmp_path / "s.txt")],
        )
        assert result.exit_code == 1
        assert "No such file or directory" in result.output
