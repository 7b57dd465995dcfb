"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from junkctl import __version__
from junkctl.cli.commands import clean, config, patterns, scan
from junkctl.utils.formatting import setup_logging

# Create main Typer app
app = typer.Typer(
    name="junkctl",
    help="Find and delete OS-generated junk across storage volumes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"junkctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress per-entry deletion progress.",
        ),
    ] = False,
) -> None:
    """junkctl - find and delete OS-generated junk.

    Scans every mounted volume (or one directory) for trash folders,
    thumbnail caches, and OS metadata files, and deletes them after
    confirmation.
    """
    setup_logging(verbose)
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="scan")(scan.scan)
app.command(name="clean")(clean.clean)
app.command(name="patterns")(patterns.patterns)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
