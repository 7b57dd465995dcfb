"""Patterns command implementation.

Lists the junk pattern catalog.
"""

from typing import Annotated

import typer

from junkctl.junk.catalog import PatternKind, iter_patterns
from junkctl.utils.formatting import console, create_pattern_table


def patterns(
    kind: Annotated[
        PatternKind | None,
        typer.Option(
            "--kind",
            "-k",
            help="Only list directory or file patterns.",
            case_sensitive=False,
        ),
    ] = None,
) -> None:
    """List the junk pattern catalog."""
    selected = tuple(iter_patterns(kind))
    console.print(create_pattern_table(selected))
    console.print(f"\n[dim]{len(selected)} pattern(s)[/dim]")
