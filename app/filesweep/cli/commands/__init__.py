"""CLI commands for filesweep.

This package contains all subcommand implementations.
"""

from filesweep.cli.commands import config

__all__ = ["config"]
