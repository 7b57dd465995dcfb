"""Shared types and utilities for CLI commands.

This module provides the output format enum and the scan pipeline used
by both ``scan`` and ``clean``: settings, root and user folder
discovery, scanning, and match presentation.
"""

import json
from enum import Enum

import typer
from rich.markup import escape

from junkctl.core.config import ConfigError, JunkctlConfig, load_config
from junkctl.discovery import DiscoveryError, discover_roots, discover_user_dirs, normalize_root
from junkctl.junk.models import MatchResult, ScanReport
from junkctl.junk.scanner import JunkScanner
from junkctl.utils.formatting import console, print_error, print_warning


class OutputFormat(str, Enum):
    """Output format options for match listings."""

    TEXT = "text"
    JSON = "json"


def load_settings() -> JunkctlConfig:
    """Load settings, exiting with an error if the file is invalid."""
    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def resolve_targets(path: str | None, config: JunkctlConfig) -> tuple[list[str], set[str]]:
    """Resolve the roots to scan and the user folders.

    Args:
        path: Explicit directory to scan. None scans every volume.
        config: Loaded settings.

    Returns:
        Tuple of (roots, user folders).

    Raises:
        typer.Exit: If discovery fails (exit code 1).
    """
    try:
        user_dirs = discover_user_dirs()
        if path is not None:
            roots = [normalize_root(path)]
        else:
            roots = discover_roots(
                include_system_root=config.include_system_root,
                exclude=config.exclude_roots,
            )
    except DiscoveryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return roots, user_dirs


def run_scan(path: str | None) -> tuple[ScanReport, MatchResult]:
    """Scan the requested roots and merge their matches.

    Roots that cannot be walked are reported as warnings and skipped.

    Args:
        path: Explicit directory to scan. None scans every volume.

    Returns:
        Tuple of (full report, merged matches ready for presentation).
    """
    config = load_settings()
    roots, user_dirs = resolve_targets(path, config)

    scanner = JunkScanner(roots, user_dirs, workers=config.workers)
    report = scanner.scan()

    for error in report.errors:
        print_warning(f"Skipped {escape(error.root)}: {escape(error.error)}")

    matches = report.merged
    if config.deduplicate:
        matches = matches.deduplicated()
    return report, matches


def print_matches(matches: MatchResult) -> None:
    """Print matched files and directories as hyphen-prefixed listings."""
    console.print("Matched files:", highlight=False)
    for file in matches.matched_files:
        console.print(f"- [junk_file]{escape(file)}[/]", highlight=False, soft_wrap=True)
    console.print("Matched directories:", highlight=False)
    for directory in matches.matched_directories:
        console.print(
            f"- [junk_directory]{escape(directory)}[/]", highlight=False, soft_wrap=True
        )


def print_matches_json(report: ScanReport, matches: MatchResult) -> None:
    """Print roots, matches, and root errors as JSON."""
    data = {
        "roots": report.roots,
        "matched_files": matches.matched_files,
        "matched_directories": matches.matched_directories,
        "errors": [{"root": e.root, "error": e.error} for e in report.errors],
    }
    console.print_json(json.dumps(data))
