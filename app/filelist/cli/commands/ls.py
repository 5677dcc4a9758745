"""List command implementation.

Prints the sorted entries of a directory tree.
"""

from pathlib import Path
from typing import Annotated

import typer

from filelist.builder import build_file_list
from filelist.cli.types import (
    EXIT_CAPACITY_EXCEEDED,
    EntryKind,
    OutputFormat,
    get_build_flags,
    get_type_mask,
    print_file_list,
    require_settings,
)
from filelist.errors import FileListError
from filelist.models import UNLIMITED_DEPTH, SortMethod
from filelist.utils.formatting import console, print_error, print_warning


def list_directory(
    ctx: typer.Context,
    directory: Annotated[
        str,
        typer.Argument(help="Directory in which the search starts."),
    ],
    types: Annotated[
        list[EntryKind] | None,
        typer.Option(
            "--type",
            "-t",
            help="Entry type to list (repeatable). Default: all types.",
            case_sensitive=False,
        ),
    ] = None,
    pattern: Annotated[
        str | None,
        typer.Option("--pattern", "-p", help="Regular expression matched against entry names."),
    ] = None,
    depth: Annotated[
        int,
        typer.Option(
            "--depth",
            "-d",
            min=UNLIMITED_DEPTH,
            help="Maximum recursion depth (0: none, -1: unlimited).",
        ),
    ] = UNLIMITED_DEPTH,
    follow: Annotated[
        bool,
        typer.Option("--follow", "-L", help="Follow symbolic links."),
    ] = False,
    dir_sep: Annotated[
        bool,
        typer.Option("--dir-sep", "-F", help="Append '/' to directory entries."),
    ] = False,
    case_sensitive: Annotated[
        bool,
        typer.Option("--case-sensitive", "-c", help="Match the pattern case-sensitively."),
    ] = False,
    basic: Annotated[
        bool,
        typer.Option("--basic", "-B", help="Use basic instead of extended regular expressions."),
    ] = False,
    xdev: Annotated[
        bool,
        typer.Option("--xdev", "-x", help="Do not descend into other file systems."),
    ] = False,
    sort: Annotated[
        SortMethod,
        typer.Option("--sort", "-s", help="Sort method.", case_sensitive=False),
    ] = SortMethod.DEFAULT,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.PLAIN,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", min=0, help="Limit number of printed entries."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (default: ~/.config/filelist/config.toml)."),
    ] = None,
) -> None:
    """List the entries of a directory tree in hierarchical order."""
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    settings = require_settings(config_path)

    try:
        result = build_file_list(
            directory,
            file_types=get_type_mask(types),
            pattern=pattern,
            depth=depth,
            flags=get_build_flags(
                follow=follow,
                dir_sep=dir_sep,
                case_sensitive=case_sensitive,
                basic=basic,
                xdev=xdev,
            ),
            sort_method=sort,
            settings=settings,
        )
    except (FileListError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_file_list(result.files, output_format, limit, title=directory)

    if not quiet and output_format == OutputFormat.TABLE:
        console.print(f"\n[dim]Found {result.count} entries[/dim]")

    if result.capacity_exceeded:
        print_warning(
            f"List truncated at {settings.max_entries} entries; some entries are missing."
        )
        raise typer.Exit(code=EXIT_CAPACITY_EXCEEDED)
