"""Scan root discovery and normalization.

Roots are absolute, forward-slash paths terminated with a single ``/``.
By default one root is produced per mounted volume, skipping the system
volume (``C:`` on Windows, ``/`` elsewhere).
"""

import logging
import os
import sys
from collections.abc import Iterable

import psutil

logger = logging.getLogger(__name__)


class DiscoveryError(Exception):
    """Raised when volumes or user folders cannot be enumerated."""


def to_slash(path: str) -> str:
    """Convert native separators to forward slashes."""
    if os.altsep:
        path = path.replace(os.altsep, "/")
    return path.replace(os.sep, "/") if os.sep != "/" else path


def normalize_root(path: str) -> str:
    """Normalize a user-supplied path into root form.

    The path is made absolute and cleaned, separators become ``/``, and
    a trailing ``/`` is appended only if it is not already present.

    Args:
        path: Path to normalize (relative paths resolve against the cwd).

    Returns:
        Absolute, forward-slash, trailing-slash-terminated path.
    """
    if not path:
        msg = "Path cannot be empty"
        raise ValueError(msg)
    cleaned = to_slash(os.path.abspath(os.path.expanduser(path)))
    return cleaned if cleaned.endswith("/") else cleaned + "/"


def system_root() -> str:
    """Get the root of the volume the operating system runs from."""
    if sys.platform == "win32":
        return normalize_root(os.environ.get("SystemDrive", "C:") + "/")
    return "/"


def discover_roots(
    *,
    include_system_root: bool = False,
    exclude: Iterable[str] = (),
) -> list[str]:
    """Enumerate one root per mounted, writable volume.

    Args:
        include_system_root: Also scan the operating system volume.
        exclude: Roots to leave out (normalized before comparison).

    Returns:
        Roots in partition order, without duplicates.

    Raises:
        DiscoveryError: If the mounted volumes cannot be enumerated.
    """
    try:
        partitions = psutil.disk_partitions(all=False)
    except (OSError, RuntimeError) as e:
        msg = f"Cannot enumerate mounted volumes: {e}"
        raise DiscoveryError(msg) from e

    excluded = {normalize_root(path).lower() for path in exclude}
    if not include_system_root:
        excluded.add(system_root().lower())

    roots: list[str] = []
    seen: set[str] = set()
    for partition in partitions:
        if "ro" in partition.opts.split(","):
            logger.debug("Skipping read-only volume %s", partition.mountpoint)
            continue
        root = normalize_root(partition.mountpoint)
        key = root.lower()
        if key in seen or key in excluded:
            continue
        seen.add(key)
        roots.append(root)

    logger.debug("Discovered roots: %s", roots)
    return roots
