"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from filelist.models import DIR_SEPARATOR

_THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "entry.dir": "bold #0e8ac8",
        "entry.file": "#ffffff",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=_THEME, color_system=_detect_color_system())
err_console = Console(theme=_THEME, stderr=True, color_system=_detect_color_system())


def create_file_table(title: str = "Files") -> Table:
    """Create a pre-configured table for displaying file list entries.

    Args:
        title: Table title.

    Returns:
        Rich Table with an index and a path column.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", style="muted", justify="right")
    table.add_column("Path", overflow="fold")
    return table


def format_entry(path: str) -> Text:
    """Format a file list entry, highlighting directories with a trailing separator.

    Paths are wrapped in Text so that brackets in file names are never
    interpreted as markup.
    """
    style = "entry.dir" if path.endswith(DIR_SEPARATOR) else "entry.file"
    return Text(path, style=style)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
