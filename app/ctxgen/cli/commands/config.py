"""Configuration commands.

Show and update the tree configuration stored in config.toml.
"""

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from ctxgen.core.config import (
    ConfigError,
    TreeConfig,
    load_tree_config_or_default,
    save_tree_config,
)
from ctxgen.core.paths import get_config_path
from ctxgen.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show and update tree configuration.",
    no_args_is_help=True,
)

_BOOL_VALUES: dict[str, bool] = {
    "true": True,
    "yes": True,
    "on": True,
    "1": True,
    "false": False,
    "no": False,
    "off": False,
    "0": False,
}


@app.command()
def show() -> None:
    """Show the effective configuration."""
    config = load_tree_config_or_default()

    table = Table(
        title=f"Configuration ({get_config_path()})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Value", style="info")

    for key, value in config.model_dump().items():
        table.add_row(key, str(value))

    console.print(table)


@app.command(name="set")
def set_value(
    key: Annotated[str, typer.Argument(help="Configuration key.")],
    value: Annotated[str, typer.Argument(help="New value.")],
) -> None:
    """Set a configuration KEY to VALUE."""
    field = TreeConfig.model_fields.get(key)
    if field is None:
        known = ", ".join(sorted(TreeConfig.model_fields))
        print_error(f"Unknown key '{key}'. Known keys: {known}")
        raise typer.Exit(code=1)

    parsed: object = value
    if field.annotation is bool:
        lowered = value.strip().lower()
        if lowered not in _BOOL_VALUES:
            print_error(f"Invalid boolean for '{key}': {value}")
            raise typer.Exit(code=1)
        parsed = _BOOL_VALUES[lowered]

    current = load_tree_config_or_default()
    try:
        updated = TreeConfig.model_validate({**current.model_dump(), key: parsed})
    except ValidationError as e:
        print_error(f"Invalid value for '{key}': {e.errors()[0]['msg']}")
        raise typer.Exit(code=1) from e

    try:
        path = save_tree_config(updated)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Set {key} = {parsed} in {path}")
