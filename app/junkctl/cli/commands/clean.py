"""Clean command implementation.

Lists junk files and directories, asks for confirmation, and deletes
them. Only ``y`` or ``Y`` confirms, with surrounding whitespace ignored.
Any other answer, or end of input, deletes nothing.
"""

from typing import Annotated

import typer
from rich.markup import escape

from junkctl.cli.types import print_matches, run_scan
from junkctl.junk.models import DeletionResult
from junkctl.junk.operator import JunkOperator
from junkctl.utils.formatting import console, print_error, print_info, print_success, print_warning

CONFIRM_PROMPT = "Do you want to delete these files and directories? (y/n)"


def clean(
    ctx: typer.Context,
    path: Annotated[
        str | None,
        typer.Argument(
            help="Directory to clean instead of every mounted volume.",
            show_default=False,
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete junk files and directories after confirmation."""
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    _, matches = run_scan(path)

    if matches.is_empty:
        print_success("No junk found. Nothing to delete.")
        return

    print_matches(matches)

    if not yes and not _confirm():
        print_info("Aborted. Nothing was deleted.")
        return

    operator = JunkOperator(
        on_delete=None if quiet else _announce,
        on_result=_report_failure,
    )
    results = operator.delete(matches.matched_files, matches.matched_directories)
    _print_summary(results)


def _confirm() -> bool:
    """Ask for confirmation; only y or Y counts as yes, whitespace ignored."""
    try:
        answer: str = typer.prompt(CONFIRM_PROMPT, default="", show_default=False)
    except typer.Abort:
        # End of input reads as an empty answer
        return False
    return answer.strip().lower() == "y"


def _announce(path: str, is_dir: bool) -> None:
    console.print(f"Deleting '{escape(path)}' ...", highlight=False, soft_wrap=True)


def _report_failure(result: DeletionResult) -> None:
    if result.failed:
        print_error(escape(result.error or f"Failed to delete {result.path}"))


def _print_summary(results: list[DeletionResult]) -> None:
    """Print how many deletions succeeded and failed."""
    success_count = sum(1 for r in results if r.success)
    fail_count = sum(1 for r in results if r.failed)

    if fail_count:
        print_warning(f"{success_count} deleted, {fail_count} failed")
    else:
        print_success(f"All {success_count} entries deleted.")
