"""Utility modules for junkctl.

This module exports commonly used utility functions.
"""

from junkctl.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
    setup_logging,
)

__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "setup_logging",
]
