"""Merge command implementation.

Builds one file list per directory and merges them into a single list.
"""

from pathlib import Path
from typing import Annotated

import typer

from filelist.builder import build_file_list, destroy_file_list, merge_file_lists
from filelist.cli.types import (
    EXIT_CAPACITY_EXCEEDED,
    EntryKind,
    OutputFormat,
    get_build_flags,
    get_type_mask,
    print_file_list,
    require_settings,
)
from filelist.core.growable import FileList, GrowthPolicy
from filelist.errors import FileListError
from filelist.models import UNLIMITED_DEPTH, SortMethod
from filelist.utils.formatting import console, print_error, print_warning


def merge_directories(
    ctx: typer.Context,
    directories: Annotated[
        list[str],
        typer.Argument(help="Directories to list; their lists are merged in order."),
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
    sort: Annotated[
        SortMethod,
        typer.Option("--sort", "-s", help="Sort method for the merged list.", case_sensitive=False),
    ] = SortMethod.DEFAULT,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.PLAIN,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (default: ~/.config/filelist/config.toml)."),
    ] = None,
) -> None:
    """List several directory trees and merge the results into one list."""
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    settings = require_settings(config_path)
    flags = get_build_flags(follow=follow, dir_sep=dir_sep)

    merged = FileList.from_paths([], GrowthPolicy.from_settings(settings))
    truncated = False
    try:
        for directory in directories:
            result = build_file_list(
                directory,
                file_types=get_type_mask(types),
                pattern=pattern,
                depth=depth,
                flags=flags,
                sort_method=SortMethod.NONE,
                settings=settings,
            )
            truncated = truncated or result.capacity_exceeded
            merge_file_lists(merged, result.files)
    except (FileListError, ValueError) as e:
        destroy_file_list(merged)
        print_error(str(e))
        raise typer.Exit(code=1) from e

    merged.sort(sort)
    print_file_list(merged, output_format, title="Merged Files")

    if not quiet and output_format == OutputFormat.TABLE:
        console.print(
            f"\n[dim]Merged {len(merged)} entries from {len(directories)} directories[/dim]"
        )

    if truncated:
        print_warning("At least one list was truncated at its maximum size.")
        raise typer.Exit(code=EXIT_CAPACITY_EXCEEDED)
