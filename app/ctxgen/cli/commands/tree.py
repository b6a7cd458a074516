"""Tree rendering command.

Renders the selection tree of a directory with tri-state markers.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.tree import Tree

from ctxgen.cli.types import collect_selection, create_model
from ctxgen.tree.model import SelectionTreeModel
from ctxgen.tree.models import Node
from ctxgen.utils.formatting import console, format_node_label, print_error


def tree(
    root: Annotated[
        Path,
        typer.Argument(help="Root directory of the tree."),
    ] = Path("."),
    select: Annotated[
        list[Path] | None,
        typer.Option("--select", "-s", help="Selected file (repeatable)."),
    ] = None,
    selection_file: Annotated[
        Path | None,
        typer.Option("--selection-file", "-f", help="File listing selected paths."),
    ] = None,
    depth: Annotated[
        int | None,
        typer.Option("--depth", "-d", min=0, help="Maximum depth to expand."),
    ] = None,
    hidden: Annotated[
        bool | None,
        typer.Option("--hidden/--no-hidden", help="Show hidden entries (overrides config)."),
    ] = None,
) -> None:
    """Render the tree under ROOT with selection markers."""
    if not root.is_dir():
        print_error(f"Not a directory: {root}")
        raise typer.Exit(code=1)

    try:
        paths = collect_selection(root, select, selection_file)
    except OSError as e:
        print_error(f"Cannot read selection file: {e}")
        raise typer.Exit(code=1) from e

    model = create_model(root, paths, show_hidden=hidden)
    rendered = Tree(f"[directory]{escape(model.root)}[/]", guide_style="border")
    _add_children(model, rendered, None, depth)
    console.print(rendered)


def _add_children(
    model: SelectionTreeModel,
    branch: Tree,
    node: Node | None,
    depth: int | None,
) -> None:
    """Attach the children of ``node`` to ``branch`` down to ``depth`` levels."""
    if depth is not None and depth <= 0:
        return

    next_depth = None if depth is None else depth - 1
    for child in model.get_children(node):
        child_branch = branch.add(format_node_label(child))
        if child.is_directory:
            _add_children(model, child_branch, child, next_depth)
