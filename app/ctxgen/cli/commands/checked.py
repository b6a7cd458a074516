"""Checked leaves listing command.

Lists every selected file regardless of tree expansion.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from ctxgen.cli.types import OutputFormat, collect_selection, create_model
from ctxgen.tree.models import Node
from ctxgen.utils.formatting import console, print_error, print_info


def checked(
    root: Annotated[
        Path,
        typer.Argument(help="Root directory relative selections resolve against."),
    ] = Path("."),
    select: Annotated[
        list[Path] | None,
        typer.Option("--select", "-s", help="Selected file (repeatable)."),
    ] = None,
    selection_file: Annotated[
        Path | None,
        typer.Option("--selection-file", "-f", help="File listing selected paths."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List the checked files as a flat view."""
    try:
        paths = collect_selection(root, select, selection_file)
    except OSError as e:
        print_error(f"Cannot read selection file: {e}")
        raise typer.Exit(code=1) from e

    model = create_model(root, paths)
    leaves = model.get_checked_leaves()

    if output_format == OutputFormat.JSON:
        _print_json(leaves)
        return

    if not leaves:
        print_info("No files selected.")
        return

    _print_table(leaves)
    console.print(f"\n[dim]{len(leaves)} file(s) selected[/dim]")


def _print_table(leaves: list[Node]) -> None:
    """Print checked leaves as a Rich table."""
    table = Table(
        title="Checked Files",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Name", no_wrap=True)
    table.add_column("Path", style="muted")

    for leaf in leaves:
        table.add_row(
            f"[selected]{leaf.symbol}[/]",
            f"[file]{escape(leaf.display_name)}[/]",
            escape(leaf.path),
        )

    console.print(table)


def _print_json(leaves: list[Node]) -> None:
    """Print checked leaves as JSON to stdout."""
    data = [
        {
            "path": leaf.path,
            "name": leaf.display_name,
            "kind": leaf.kind.value,
            "state": leaf.selection_state.value,
        }
        for leaf in leaves
    ]
    console.print_json(json.dumps(data))
