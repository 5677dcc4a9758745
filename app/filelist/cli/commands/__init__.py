"""CLI commands for filelist.

This package contains all subcommand implementations.
"""

from filelist.cli.commands import config, ls, merge

__all__ = ["config", "ls", "merge"]
