"""Recursive directory walker for scan roots.

Enumerates every directory and file below a root. Unreadable subtrees
(permission denied) and volumes that are not ready (ejected media,
disconnected drives) are skipped; any other I/O error aborts the walk
for that root only.
"""

import errno
import logging
import os
from dataclasses import dataclass, field
from enum import Enum

from junkctl.discovery.roots import to_slash

logger = logging.getLogger(__name__)

# Windows ERROR_NOT_READY, surfaced as OSError.winerror
_WINERROR_NOT_READY = 21

_NOT_READY_ERRNOS: frozenset[int] = frozenset(
    code
    for code in (
        getattr(errno, "ENODEV", None),
        getattr(errno, "ENXIO", None),
        getattr(errno, "ENOMEDIUM", None),
    )
    if code is not None
)

_PERMISSION_ERRNOS: frozenset[int] = frozenset((errno.EACCES, errno.EPERM))


class ErrorKind(str, Enum):
    """Classification of an OS error raised while walking.

    Attributes:
        PERMISSION_DENIED: The entry cannot be read by the current user.
        NOT_READY: The device behind the entry is not available.
        NOT_FOUND: The entry disappeared during the walk.
        OTHER: Any other I/O failure.
    """

    PERMISSION_DENIED = "permission_denied"
    NOT_READY = "not_ready"
    NOT_FOUND = "not_found"
    OTHER = "other"

    @property
    def skippable(self) -> bool:
        """Check if the walk should skip the entry and continue."""
        return self in (ErrorKind.PERMISSION_DENIED, ErrorKind.NOT_READY)


class WalkError(Exception):
    """Raised when walking a root fails with an unrecoverable I/O error.

    Attributes:
        root: Root directory whose walk was aborted.
        cause: The underlying OS error.
    """

    def __init__(self, root: str, cause: OSError) -> None:
        self.root = root
        self.cause = cause
        super().__init__(f"Cannot walk {root}: {cause}")


@dataclass(slots=True)
class WalkResult:
    """Entries found below a root.

    Attributes:
        directories: Directory paths, each terminated with ``/``.
        files: File paths (anything that is not a directory).
    """

    directories: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)


def classify_os_error(exc: OSError) -> ErrorKind:
    """Map an OS error onto a walk error kind.

    Args:
        exc: Error raised by a filesystem call.

    Returns:
        The matching ErrorKind.
    """
    if getattr(exc, "winerror", None) == _WINERROR_NOT_READY:
        return ErrorKind.NOT_READY
    if isinstance(exc, PermissionError) or exc.errno in _PERMISSION_ERRNOS:
        return ErrorKind.PERMISSION_DENIED
    if exc.errno in _NOT_READY_ERRNOS:
        return ErrorKind.NOT_READY
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return ErrorKind.NOT_FOUND
    return ErrorKind.OTHER


def walk_tree(root: str) -> WalkResult:
    """Collect every directory and file below a root.

    The root itself is reported as the first directory. Symbolic links
    are never followed and are reported as files. Traversal is
    depth-first; callers must not rely on the order.

    Args:
        root: Absolute, trailing-slash-terminated root path.

    Returns:
        WalkResult with all directories and files.

    Raises:
        WalkError: If an error other than permission denied or device
            not ready occurs.
    """
    result = WalkResult()
    stack: list[str] = [root]

    while stack:
        current = stack.pop()
        directory = to_slash(current)
        result.directories.append(directory if directory.endswith("/") else directory + "/")

        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            _handle_error(root, current, e)
            continue

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                _handle_error(root, entry.path, e)
                continue

            if is_dir:
                stack.append(entry.path)
            else:
                result.files.append(to_slash(entry.path))

    logger.debug(
        "Walked %s: %d directories, %d files",
        root,
        len(result.directories),
        len(result.files),
    )
    return result


def _handle_error(root: str, path: str, exc: OSError) -> None:
    """Skip recoverable errors, abort the root walk on anything else."""
    kind = classify_os_error(exc)
    if kind.skippable:
        logger.debug("Skipping %s (%s): %s", path, kind.value, exc)
        return
    raise WalkError(root, exc) from exc
