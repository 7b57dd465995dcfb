"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from junkctl.core.theme import get_theme
from junkctl.junk.catalog import JunkPattern


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )


def create_pattern_table(patterns: tuple[JunkPattern, ...]) -> Table:
    """Create a table listing catalog patterns.

    Args:
        patterns: Patterns to list, in catalog order.

    Returns:
        Rich Table with Pattern, Kind, and Platform columns.
    """
    table = Table(
        title="Junk Patterns",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Pattern", no_wrap=True)
    table.add_column("Kind", width=10)
    table.add_column("Platform", style="muted", width=10)

    for pattern in patterns:
        style = "junk_directory" if pattern.is_directory else "junk_file"
        table.add_row(
            f"[{style}]{escape(pattern.raw)}[/]",
            pattern.kind.value,
            pattern.platform.value,
        )

    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
