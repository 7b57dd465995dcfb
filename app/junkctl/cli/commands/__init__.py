"""CLI commands for junkctl.

This package contains all subcommand implementations.
"""

from junkctl.cli.commands import clean, config, patterns, scan

__all__ = ["clean", "config", "patterns", "scan"]
