"""Toggle command.

Toggles a file or directory in a selection file, mirroring a click on a
tree node.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from ctxgen.cli.types import create_model, read_selection_file, write_selection_file
from ctxgen.tree.models import EntryKind, Node
from ctxgen.tree.toggle import apply_toggle
from ctxgen.utils.formatting import print_error, print_success


def toggle(
    path: Annotated[
        Path,
        typer.Argument(help="File or directory to toggle."),
    ],
    selection_file: Annotated[
        Path,
        typer.Option("--selection-file", "-f", help="File listing selected paths."),
    ],
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Root directory of the tree."),
    ] = Path("."),
    write: Annotated[
        bool,
        typer.Option("--write", "-w", help="Write the new selection back to the file."),
    ] = False,
) -> None:
    """Toggle PATH and print (or write) the resulting selection."""
    target = os.path.abspath(os.path.join(root, path))
    if not os.path.lexists(target):
        print_error(f"No such file or directory: {target}")
        raise typer.Exit(code=1)

    try:
        paths = read_selection_file(selection_file, root) if selection_file.exists() else []
    except OSError as e:
        print_error(f"Cannot read selection file: {e}")
        raise typer.Exit(code=1) from e

    model = create_model(root, paths)
    kind = EntryKind.DIRECTORY if os.path.isdir(target) else EntryKind.FILE
    node = Node(path=target, kind=kind, selection_state=model.state_of(target))

    new_paths = apply_toggle(model, node)

    if not write:
        for new_path in new_paths:
            typer.echo(new_path)
        return

    try:
        write_selection_file(selection_file, new_paths)
    except OSError as e:
        print_error(f"Cannot write selection file: {e}")
        raise typer.Exit(code=1) from e

    state = model.state_of(target)
    print_success(f"{node.display_name} is now {state.value} ({len(new_paths)} file(s) selected)")
