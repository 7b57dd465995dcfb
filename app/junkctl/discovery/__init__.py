"""Scan root and user folder discovery.

This module resolves the roots to scan (one per mounted volume, or an
explicit path) and the user folders used by the desktop metadata
exclusion.
"""

from junkctl.discovery.known_folders import KNOWN_FOLDER_IDS, discover_user_dirs
from junkctl.discovery.roots import (
    DiscoveryError,
    discover_roots,
    normalize_root,
    system_root,
    to_slash,
)

__all__ = [
    "KNOWN_FOLDER_IDS",
    "DiscoveryError",
    "discover_roots",
    "discover_user_dirs",
    "normalize_root",
    "system_root",
    "to_slash",
]
