"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from ctxgen import __version__
from ctxgen.cli.commands import checked, config, toggle, tree
from ctxgen.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="ctxgen",
    help="Tri-state file selection tree for building context bundles.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"ctxgen version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """ctxgen - pick files from a directory tree with tri-state selection.

    Directories show whether none, some, or all of the files beneath
    them are selected.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


# Register commands
app.command(name="tree")(tree.tree)
app.command(name="checked")(checked.checked)
app.command(name="toggle")(toggle.toggle)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
