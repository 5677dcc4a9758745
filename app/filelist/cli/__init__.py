"""CLI package for filelist.

This package contains the Typer application and all subcommands.
"""

from filelist.cli.main import app

__all__ = ["app"]
