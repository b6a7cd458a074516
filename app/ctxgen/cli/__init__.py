"""CLI package for ctxgen.

This package contains the Typer application and all subcommands.
"""

from ctxgen.cli.main import app

__all__ = ["app"]
