"""junkctl - find and remove OS-generated junk across storage volumes."""

__version__ = "0.1.0"
