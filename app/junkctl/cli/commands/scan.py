"""Scan command implementation.

Lists junk files and directories without deleting anything.
"""

from typing import Annotated

import typer

from junkctl.cli.types import OutputFormat, print_matches, print_matches_json, run_scan
from junkctl.utils.formatting import console, print_success


def scan(
    path: Annotated[
        str | None,
        typer.Argument(
            help="Directory to scan instead of every mounted volume.",
            show_default=False,
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
) -> None:
    """Scan for junk files and directories."""
    report, matches = run_scan(path)

    if output_format == OutputFormat.JSON:
        print_matches_json(report, matches)
        return

    if matches.is_empty:
        print_success("No junk found.")
        return

    print_matches(matches)
    console.print(
        f"\n[dim]Found {len(matches.matched_files)} file(s) and "
        f"{len(matches.matched_directories)} directory(ies) "
        f"across {len(report.results)} root(s)[/dim]"
    )
