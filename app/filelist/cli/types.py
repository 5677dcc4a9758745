"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

import json
from enum import Enum
from pathlib import Path

import typer
from rich.table import Table

from filelist.core.growable import FileList
from filelist.core.settings import ListSettings, SettingsError, load_settings
from filelist.models import BuildFlag, FileType
from filelist.utils.formatting import console, create_file_table, format_entry, print_error

# Exit code for a result that was truncated at the maximum list size
EXIT_CAPACITY_EXCEEDED = 3


class EntryKind(str, Enum):
    """Entry types selectable with --type."""

    FILE = "file"
    DIR = "dir"
    LINK = "link"
    FIFO = "fifo"
    SOCKET = "socket"
    CHAR = "char"
    BLOCK = "block"
    UNKNOWN = "unknown"


_KIND_TO_TYPE: dict[EntryKind, FileType] = {
    EntryKind.FILE: FileType.REG,
    EntryKind.DIR: FileType.DIR,
    EntryKind.LINK: FileType.LNK,
    EntryKind.FIFO: FileType.FIFO,
    EntryKind.SOCKET: FileType.SOCK,
    EntryKind.CHAR: FileType.CHR,
    EntryKind.BLOCK: FileType.BLK,
    EntryKind.UNKNOWN: FileType.UNKNOWN,
}


class OutputFormat(str, Enum):
    """Output format options for file lists."""

    PLAIN = "plain"
    TABLE = "table"
    JSON = "json"


def get_type_mask(kinds: list[EntryKind] | None) -> FileType:
    """Combine --type selections into a type mask (empty selects all types)."""
    mask = FileType(0)
    for kind in kinds or []:
        mask |= _KIND_TO_TYPE[kind]
    return mask


def get_build_flags(
    *,
    follow: bool = False,
    dir_sep: bool = False,
    case_sensitive: bool = False,
    basic: bool = False,
    xdev: bool = False,
) -> BuildFlag:
    """Combine CLI switches into builder flags."""
    flags = BuildFlag(0)
    if follow:
        flags |= BuildFlag.FOLLOW_LINKS
    if dir_sep:
        flags |= BuildFlag.DIR_SEP
    if case_sensitive:
        flags |= BuildFlag.REGEX_CASE
    if basic:
        flags |= BuildFlag.REGEX_BASIC
    if xdev:
        flags |= BuildFlag.XDEV
    return flags


def require_settings(path: Path | None = None) -> ListSettings:
    """Load list settings, exiting with an error message on failure.

    Args:
        path: Settings file, or None for the default location.

    Returns:
        The loaded settings.

    Raises:
        typer.Exit: If the settings cannot be loaded.
    """
    try:
        return load_settings(path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def print_file_list(
    files: FileList,
    output_format: OutputFormat,
    limit: int | None = None,
    title: str = "Files",
) -> None:
    """Print a file list in the requested format.

    Args:
        files: The list to print.
        output_format: Plain lines, a Rich table, or JSON.
        limit: Maximum number of entries to print.
        title: Table title.
    """
    paths = files.to_list()
    if limit is not None:
        paths = paths[:limit]

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(paths))
        return

    if output_format == OutputFormat.TABLE:
        table: Table = create_file_table(title)
        for index, path in enumerate(paths, start=1):
            table.add_row(str(index), format_entry(path))
        console.print(table)
        return

    for path in paths:
        typer.echo(path)
