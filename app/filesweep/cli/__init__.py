"""CLI package for filesweep.

This package contains the Typer application and all subcommands.
"""

from filesweep.cli.main import app

__all__ = ["app"]
