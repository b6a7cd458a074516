"""CLI commands for ctxgen.

This package contains all subcommand implementations.
"""

from ctxgen.cli.commands import checked, config, toggle, tree

__all__ = ["checked", "config", "toggle", "tree"]
